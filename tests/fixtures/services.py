"""Service fixtures for testing."""

import pytest

from src.catalog.core.services import CatalogService, DbSessionService
from src.catalog.core.storage import InMemoryBookStore
from src.catalog.core.storage.database_store import DatabaseBookStore
from tests.fixtures.dummies import DummyIsbnChecker, DummyNotifier

NOTICE_RECIPIENT = "catalog@example.com"


@pytest.fixture
def memory_store() -> InMemoryBookStore:
    """Get a fresh in-memory book store."""
    return InMemoryBookStore()


@pytest.fixture
def database_store(db_service: DbSessionService) -> DatabaseBookStore:
    """Get a database book store on the test engine."""
    return DatabaseBookStore(db_service)


@pytest.fixture
def catalog_service(memory_store: InMemoryBookStore) -> CatalogService:
    """Catalog service without collaborators."""
    return CatalogService(memory_store)


@pytest.fixture
def full_catalog_service(
    memory_store: InMemoryBookStore,
    isbn_checker: DummyIsbnChecker,
    notifier: DummyNotifier,
) -> CatalogService:
    """Catalog service with both collaborators configured."""
    return CatalogService(
        memory_store,
        isbn_checker=isbn_checker,
        notifier=notifier,
        notice_recipient=NOTICE_RECIPIENT,
    )
