"""Book storage abstractions."""

from .book_store import BookStore, InMemoryBookStore

__all__ = ["BookStore", "InMemoryBookStore"]
