"""Application startup wires the configured backend and collaborators."""

import pytest
from fastapi.testclient import TestClient

from src.catalog.api.http.app import create_app
from src.catalog.api.http.app_data import build_dependencies
from src.catalog.core.services import HttpEmailNotifier, HttpIsbnChecker
from src.catalog.core.storage import InMemoryBookStore
from src.catalog.core.storage.database_store import DatabaseBookStore
from src.catalog.runtime.config.config_data import (
    CatalogConfig,
    ConfigData,
    IsbnCheckerConfig,
    NotifierConfig,
)

pytestmark = pytest.mark.integration


class TestBuildDependencies:
    @pytest.mark.asyncio
    async def test_memory_without_collaborators(self, memory_config: ConfigData):
        deps = build_dependencies(memory_config)
        try:
            assert isinstance(deps.book_store, InMemoryBookStore)
            assert deps.catalog_service.store is deps.book_store
            assert deps.database_service is None
            assert deps.http_client is None
        finally:
            await deps.aclose()

    @pytest.mark.asyncio
    async def test_database_backend(self, database_config: ConfigData):
        deps = build_dependencies(database_config)
        try:
            assert isinstance(deps.book_store, DatabaseBookStore)
            assert deps.database_service is not None
            assert deps.book_store.is_available() is True
        finally:
            await deps.aclose()

    @pytest.mark.asyncio
    async def test_collaborators_share_one_http_client(self):
        config = ConfigData(
            catalog=CatalogConfig(
                isbn_checker=IsbnCheckerConfig(enabled=True),
                notifier=NotifierConfig(enabled=True, recipient="ops@example.com"),
            )
        )

        deps = build_dependencies(config)
        try:
            service = deps.catalog_service
            assert deps.http_client is not None
            assert isinstance(service._isbn_checker, HttpIsbnChecker)
            assert isinstance(service._notifier, HttpEmailNotifier)
            assert service._notice_recipient == "ops@example.com"
        finally:
            await deps.aclose()
        assert deps.http_client.is_closed


class TestLifespan:
    def test_startup_builds_database_backed_app(self, database_config: ConfigData):
        app = create_app(config=database_config)

        with TestClient(app) as client:
            created = client.post(
                "/api/v1/createBook",
                json={"isbn": "978-0-13", "title": "Clean Code", "total_pages": 464},
            )
            fetched = client.get("/api/v1/getBookByIsbn/978-0-13")
            listed = client.get("/api/v1/getBooks")
            ready = client.get("/health/ready")

        assert app.state.app_dependencies is None
        assert created.status_code == 200
        assert fetched.json()["views"] == 1
        assert listed.json() == [
            {"isbn": "978-0-13", "title": "Clean Code", "total_pages": 464, "views": 1}
        ]
        assert ready.status_code == 200
        assert ready.json()["checks"]["book_store"]["type"] == "database"

    def test_injected_dependencies_are_not_closed(self, memory_config: ConfigData):
        deps = build_dependencies(memory_config)
        app = create_app(deps, config=memory_config)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

        assert app.state.app_dependencies is deps
