"""Catalog error hierarchy.

Errors are raised by the core and mapped to HTTP responses once, at the edge
(see ``src.catalog.api.http.errors``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.catalog.entities.book import Book


class CatalogError(Exception):
    """Base class for every error the catalog reports to its callers."""

    code: str = "catalog_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BookAlreadyExistsError(CatalogError):
    """A book with the same ISBN is already stored."""

    code = "book_already_exists"

    def __init__(self, isbn: str, message: str | None = None) -> None:
        super().__init__(message or f"Book with ISBN {isbn!r} already exists")
        self.isbn = isbn


class DuplicateIsbnError(BookAlreadyExistsError):
    """Raised by a store when an insert loses against an existing key."""

    code = "duplicate_isbn"

    def __init__(self, isbn: str) -> None:
        super().__init__(isbn, f"Duplicate ISBN {isbn!r} rejected by the store")


class IsbnRejectedError(CatalogError):
    """The external ISBN checker reported the ISBN as invalid."""

    code = "isbn_rejected"

    def __init__(self, isbn: str) -> None:
        super().__init__(f"ISBN {isbn!r} is not valid based on external service")
        self.isbn = isbn


class BookNotFoundError(CatalogError):
    """No book is stored under the requested ISBN."""

    code = "book_not_found"

    def __init__(self, isbn: str) -> None:
        super().__init__(f"Book with ISBN {isbn!r} not found")
        self.isbn = isbn


class CollaboratorError(CatalogError):
    """An external collaborator answered with a failure."""

    code = "collaborator_error"
    outcome = "failed"

    def __init__(self, collaborator: str, reason: str) -> None:
        super().__init__(f"{collaborator} {self.outcome}: {reason}")
        self.collaborator = collaborator
        self.reason = reason


class CollaboratorUnavailableError(CollaboratorError):
    """An external collaborator could not be reached or timed out."""

    code = "collaborator_unavailable"
    outcome = "unavailable"


class NotificationFailedError(CatalogError):
    """The book was stored but the creation notice could not be sent."""

    code = "notification_failed"

    def __init__(self, book: Book, reason: str) -> None:
        super().__init__(
            f"Book {book.isbn!r} was stored but the notification failed: {reason}"
        )
        self.book = book


class StorageFailureError(CatalogError):
    """The backing store failed for a reason not otherwise classified."""

    code = "storage_failure"
