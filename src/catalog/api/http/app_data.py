from __future__ import annotations

from dataclasses import dataclass, field

import httpx
from loguru import logger

from src.catalog.core.services import (
    CatalogService,
    DbSessionService,
    HttpEmailNotifier,
    HttpIsbnChecker,
)
from src.catalog.core.storage import BookStore
from src.catalog.core.storage.factory import build_book_store
from src.catalog.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    catalog_service: CatalogService
    book_store: BookStore
    database_service: DbSessionService | None = None
    http_client: httpx.AsyncClient | None = field(default=None, repr=False)

    async def aclose(self) -> None:
        """Release the outbound HTTP client and database engine."""
        if self.http_client is not None:
            await self.http_client.aclose()
        if self.database_service is not None:
            self.database_service.dispose()


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Wire the store, the collaborators and the catalog service from config."""
    catalog_config = config.catalog

    database_service = (
        DbSessionService(config) if catalog_config.storage == "database" else None
    )
    store = build_book_store(config, database_service)

    http_client: httpx.AsyncClient | None = None
    if catalog_config.isbn_checker.enabled or catalog_config.notifier.enabled:
        http_client = httpx.AsyncClient(headers={"User-Agent": "book-catalog"})

    isbn_checker = None
    if catalog_config.isbn_checker.enabled:
        isbn_checker = HttpIsbnChecker(
            catalog_config.isbn_checker.base_url,
            timeout=catalog_config.isbn_checker.timeout_seconds,
            client=http_client,
        )

    notifier = None
    if catalog_config.notifier.enabled:
        notifier = HttpEmailNotifier(
            catalog_config.notifier.base_url,
            timeout=catalog_config.notifier.timeout_seconds,
            client=http_client,
        )

    logger.bind(
        storage=catalog_config.storage,
        isbn_checker=isbn_checker is not None,
        notifier=notifier is not None,
    ).info("Catalog wired")

    service = CatalogService(
        store,
        isbn_checker=isbn_checker,
        notifier=notifier,
        notice_recipient=catalog_config.notifier.recipient if notifier else None,
    )
    return ApplicationDependencies(
        catalog_service=service,
        book_store=store,
        database_service=database_service,
        http_client=http_client,
    )
