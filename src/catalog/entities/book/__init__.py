"""Entity package: Book."""

from .entity import Book, BookCreate
from .table import BookTable

__all__ = ["Book", "BookCreate", "BookTable"]
