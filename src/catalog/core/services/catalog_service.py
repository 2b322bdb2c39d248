"""Catalog orchestration: create, list and get-by-ISBN use cases."""

from __future__ import annotations

from loguru import logger

from src.catalog.core.errors import (
    BookAlreadyExistsError,
    BookNotFoundError,
    CollaboratorError,
    IsbnRejectedError,
    NotificationFailedError,
)
from src.catalog.core.services.clients.base import IsbnChecker, Notifier
from src.catalog.core.storage.book_store import BookStore
from src.catalog.entities.book import Book, BookCreate


class CatalogService:
    """Coordinates the book store with the optional external collaborators.

    ``isbn_checker`` and ``notifier`` are optional; passing None disables the
    corresponding step. A notifier needs a ``notice_recipient``.
    """

    def __init__(
        self,
        store: BookStore,
        isbn_checker: IsbnChecker | None = None,
        notifier: Notifier | None = None,
        notice_recipient: str | None = None,
    ) -> None:
        if notifier is not None and not notice_recipient:
            raise ValueError("A notifier requires a notice recipient")

        self._store = store
        self._isbn_checker = isbn_checker
        self._notifier = notifier
        self._notice_recipient = notice_recipient

    @property
    def store(self) -> BookStore:
        return self._store

    async def create_book(self, candidate: BookCreate) -> Book:
        """Validate, store and announce a new book.

        Raises:
            IsbnRejectedError: The ISBN checker refused the ISBN
            CollaboratorUnavailableError: The ISBN checker could not be reached
            BookAlreadyExistsError: The ISBN is already stored
            NotificationFailedError: The book was stored but the notice failed
            StorageFailureError: The store failed
        """
        isbn = candidate.isbn

        if self._isbn_checker is not None:
            if not await self._isbn_checker.check_isbn(isbn):
                logger.bind(isbn=isbn).warning("ISBN rejected by checker")
                raise IsbnRejectedError(isbn)

        # Fast path only; insert is where uniqueness is enforced
        if await self._store.find_by_isbn(isbn) is not None:
            logger.bind(isbn=isbn).info("Book already exists")
            raise BookAlreadyExistsError(isbn)

        try:
            stored = await self._store.insert(candidate.to_book())
        except BookAlreadyExistsError:
            logger.bind(isbn=isbn).info("Book already exists (lost concurrent insert)")
            raise

        logger.bind(isbn=isbn).info("Book created")

        if self._notifier is not None and self._notice_recipient is not None:
            try:
                await self._notifier.send_creation_notice(self._notice_recipient, stored)
            except CollaboratorError as e:
                # The record stays stored; the caller still sees the failure
                logger.bind(isbn=isbn).error("Creation notice failed: {}", e.message)
                raise NotificationFailedError(stored, e.reason) from e

        return stored

    async def list_books(self) -> list[Book]:
        """Every stored book, in no particular order."""
        return await self._store.list_all()

    async def get_book(self, isbn: str) -> Book:
        """Fetch a book and count the read.

        The returned record carries the post-increment view count.

        Raises:
            BookNotFoundError: No book is stored under ``isbn``
        """
        if await self._store.find_by_isbn(isbn) is None:
            logger.bind(isbn=isbn).debug("Book not found")
            raise BookNotFoundError(isbn)

        return await self._store.increment_views(isbn)
