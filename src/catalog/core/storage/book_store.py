"""Book store interface and the in-memory implementation.

Every backend keeps one record per ISBN and honours the same contract:
``insert`` is the atomic uniqueness check, ``increment_views`` never loses
updates, and callers never need to know which backend is active.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from loguru import logger

from src.catalog.core.errors import BookNotFoundError, DuplicateIsbnError
from src.catalog.entities.book import Book


class BookStore(ABC):
    """Abstract interface for book storage backends."""

    @abstractmethod
    async def insert(self, book: Book) -> Book:
        """Store a book unless its ISBN is already taken.

        Args:
            book: Record to store

        Returns:
            The stored copy

        Raises:
            DuplicateIsbnError: A record already exists under ``book.isbn``
        """

    @abstractmethod
    async def find_by_isbn(self, isbn: str) -> Book | None:
        """Look up a book without side effects.

        Returns:
            The stored book or None if absent
        """

    @abstractmethod
    async def list_all(self) -> list[Book]:
        """Snapshot of every stored book, in no particular order."""

    @abstractmethod
    async def increment_views(self, isbn: str) -> Book:
        """Atomically add one to the view counter of ``isbn``.

        Returns:
            The record after the increment

        Raises:
            BookNotFoundError: No record is stored under ``isbn``
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the storage backend is healthy and available."""


class InMemoryBookStore(BookStore):
    """Lock-guarded dictionary keyed by ISBN.

    Critical sections never await, so a plain ``threading.Lock`` serializes
    both coroutines on one loop and callers on other threads.
    """

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}
        self._lock = threading.Lock()

    async def insert(self, book: Book) -> Book:
        with self._lock:
            if book.isbn in self._books:
                raise DuplicateIsbnError(book.isbn)
            self._books[book.isbn] = book
        logger.debug("Stored book {} in memory", book.isbn)
        return book

    async def find_by_isbn(self, isbn: str) -> Book | None:
        with self._lock:
            return self._books.get(isbn)

    async def list_all(self) -> list[Book]:
        with self._lock:
            return list(self._books.values())

    async def increment_views(self, isbn: str) -> Book:
        with self._lock:
            current = self._books.get(isbn)
            if current is None:
                raise BookNotFoundError(isbn)
            updated = current.with_views(current.views + 1)
            self._books[isbn] = updated
        return updated

    def is_available(self) -> bool:
        """In-memory storage is always available."""
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)
