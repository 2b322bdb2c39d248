"""Selects the book store backend from configuration."""

from loguru import logger

from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.storage.book_store import BookStore, InMemoryBookStore
from src.catalog.core.storage.database_store import DatabaseBookStore
from src.catalog.runtime.config.config_data import ConfigData


def build_book_store(
    config: ConfigData, database_service: DbSessionService | None = None
) -> BookStore:
    """Create the store named by ``config.catalog.storage``.

    The database backend needs a ``DbSessionService``; its tables are created
    on first use.
    """
    backend = config.catalog.storage
    if backend == "memory":
        logger.info("Using in-memory book store")
        return InMemoryBookStore()

    if backend == "database":
        if database_service is None:
            raise ValueError("The database book store requires a database service")
        database_service.create_all()
        logger.info("Using database book store")
        return DatabaseBookStore(database_service)

    raise ValueError(f"Unknown book store backend: {backend!r}")
