"""Tests for the book HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from src.catalog.api.http.app import create_app
from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import CatalogService
from src.catalog.core.storage import InMemoryBookStore
from tests.fixtures.dummies import DummyIsbnChecker, DummyNotifier
from tests.fixtures.services import NOTICE_RECIPIENT

CLEAN_CODE = {"isbn": "978-0-13", "title": "Clean Code", "total_pages": 464}


def _client_for(service: CatalogService) -> TestClient:
    dependencies = ApplicationDependencies(
        catalog_service=service, book_store=service.store
    )
    return TestClient(create_app(dependencies))


@pytest.fixture
def client(catalog_service: CatalogService):
    with _client_for(catalog_service) as client:
        yield client


class TestCreateBook:
    def test_create_returns_book_without_views(self, client: TestClient):
        response = client.post("/api/v1/createBook", json=CLEAN_CODE)

        assert response.status_code == 200
        assert response.json() == CLEAN_CODE

    def test_duplicate_is_conflict(self, client: TestClient):
        client.post("/api/v1/createBook", json=CLEAN_CODE)

        response = client.post(
            "/api/v1/createBook", json={**CLEAN_CODE, "title": "Other"}
        )

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "book_already_exists"

    @pytest.mark.parametrize(
        "body",
        [
            {"title": "No ISBN"},
            {"isbn": "", "title": "Empty ISBN"},
            {"isbn": "1", "title": "Negative", "total_pages": -5},
        ],
    )
    def test_malformed_body_rejected(self, client: TestClient, body):
        response = client.post("/api/v1/createBook", json=body)

        assert response.status_code == 422
        assert client.get("/api/v1/getBooks").json() == []

    def test_rejected_isbn(self, memory_store: InMemoryBookStore):
        service = CatalogService(memory_store, isbn_checker=DummyIsbnChecker(valid=False))

        with _client_for(service) as client:
            response = client.post("/api/v1/createBook", json=CLEAN_CODE)

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "isbn_rejected"
        assert len(memory_store) == 0

    def test_unreachable_checker(self, memory_store: InMemoryBookStore):
        service = CatalogService(
            memory_store, isbn_checker=DummyIsbnChecker(unavailable=True)
        )

        with _client_for(service) as client:
            response = client.post("/api/v1/createBook", json=CLEAN_CODE)

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "collaborator_unavailable"

    def test_notification_failure_after_store(self, memory_store: InMemoryBookStore):
        service = CatalogService(
            memory_store,
            notifier=DummyNotifier(fail=True),
            notice_recipient=NOTICE_RECIPIENT,
        )

        with _client_for(service) as client:
            response = client.post("/api/v1/createBook", json=CLEAN_CODE)
            fetched = client.get("/api/v1/getBookByIsbn/978-0-13")

        assert response.status_code == 502
        assert response.json()["detail"]["code"] == "notification_failed"
        assert response.json()["detail"]["isbn"] == "978-0-13"
        assert fetched.status_code == 200


class TestListBooks:
    def test_empty(self, client: TestClient):
        response = client.get("/api/v1/getBooks")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_with_views(self, client: TestClient):
        client.post("/api/v1/createBook", json=CLEAN_CODE)
        client.get("/api/v1/getBookByIsbn/978-0-13")

        response = client.get("/api/v1/getBooks")

        assert response.json() == [{**CLEAN_CODE, "views": 1}]


class TestGetBookByIsbn:
    def test_get_counts_views(self, client: TestClient):
        client.post("/api/v1/createBook", json=CLEAN_CODE)

        first = client.get("/api/v1/getBookByIsbn/978-0-13")
        second = client.get("/api/v1/getBookByIsbn/978-0-13")

        assert first.json() == {**CLEAN_CODE, "views": 1}
        assert second.json()["views"] == 2

    def test_missing_is_not_found(self, client: TestClient):
        response = client.get("/api/v1/getBookByIsbn/missing")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "book_not_found"


class TestMiddleware:
    def test_request_id_echoed(self, client: TestClient):
        response = client.get("/api/v1/getBooks", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client: TestClient):
        response = client.get("/api/v1/getBooks")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
