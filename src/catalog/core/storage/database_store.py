"""Relational book store backed by the ``books`` table."""

from __future__ import annotations

import asyncio

from loguru import logger
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from src.catalog.core.errors import (
    BookNotFoundError,
    DuplicateIsbnError,
    StorageFailureError,
)
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.storage.book_store import BookStore
from src.catalog.entities.book import Book, BookTable


class DatabaseBookStore(BookStore):
    """Book store that delegates concurrency control to the database.

    Each operation runs in its own transaction on a worker thread. The unique
    index on ``isbn`` makes ``insert`` atomic and ``views = views + 1`` is a
    single UPDATE, so concurrent increments never lose updates.
    """

    def __init__(self, database_service: DbSessionService) -> None:
        self._db = database_service
        self._available = True

    async def insert(self, book: Book) -> Book:
        return await asyncio.to_thread(self._insert, book)

    async def find_by_isbn(self, isbn: str) -> Book | None:
        return await asyncio.to_thread(self._find_by_isbn, isbn)

    async def list_all(self) -> list[Book]:
        return await asyncio.to_thread(self._list_all)

    async def increment_views(self, isbn: str) -> Book:
        return await asyncio.to_thread(self._increment_views, isbn)

    def is_available(self) -> bool:
        """Check the database connection; remembers the last failure."""
        self._available = self._db.health_check()
        return self._available

    def _insert(self, book: Book) -> Book:
        try:
            with self._db.session_scope() as session:
                row = BookTable.from_book(book)
                session.add(row)
                session.flush()
                stored = row.to_book()
        except IntegrityError as e:
            if self._isbn_taken(book.isbn):
                raise DuplicateIsbnError(book.isbn) from e
            raise self._storage_failure("insert", e) from e
        except SQLAlchemyError as e:
            raise self._storage_failure("insert", e) from e

        self._available = True
        logger.debug("Stored book {} in database", book.isbn)
        return stored

    def _find_by_isbn(self, isbn: str) -> Book | None:
        try:
            with self._db.session_scope() as session:
                row = self._select_row(session, isbn)
                return row.to_book() if row is not None else None
        except SQLAlchemyError as e:
            raise self._storage_failure("find_by_isbn", e) from e

    def _list_all(self) -> list[Book]:
        try:
            with self._db.session_scope() as session:
                statement = select(BookTable).where(col(BookTable.deleted_at).is_(None))
                return [row.to_book() for row in session.exec(statement).all()]
        except SQLAlchemyError as e:
            raise self._storage_failure("list_all", e) from e

    def _increment_views(self, isbn: str) -> Book:
        try:
            with self._db.session_scope() as session:
                statement = (
                    update(BookTable)
                    .where(col(BookTable.isbn) == isbn)
                    .where(col(BookTable.deleted_at).is_(None))
                    .values(views=col(BookTable.views) + 1)
                )
                result = session.exec(statement)  # type: ignore[call-overload]
                if result.rowcount == 0:
                    raise BookNotFoundError(isbn)

                row = self._select_row(session, isbn)
                if row is None:
                    raise BookNotFoundError(isbn)
                return row.to_book()
        except SQLAlchemyError as e:
            raise self._storage_failure("increment_views", e) from e

    def _isbn_taken(self, isbn: str) -> bool:
        try:
            with self._db.session_scope() as session:
                statement = select(BookTable.id).where(col(BookTable.isbn) == isbn)
                return session.exec(statement).first() is not None
        except SQLAlchemyError:
            return False

    @staticmethod
    def _select_row(session: Session, isbn: str) -> BookTable | None:
        statement = (
            select(BookTable)
            .where(col(BookTable.isbn) == isbn)
            .where(col(BookTable.deleted_at).is_(None))
        )
        session.expire_all()
        return session.exec(statement).first()

    def _storage_failure(self, operation: str, error: SQLAlchemyError) -> StorageFailureError:
        self._available = False
        logger.bind(operation=operation, error_type=type(error).__name__).error(
            "Book store operation failed: {}", error
        )
        return StorageFailureError(f"Book store {operation} failed: {error}")
