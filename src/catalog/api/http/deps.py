"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import CatalogService
from src.catalog.core.storage import BookStore
from src.catalog.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service instance."""
    return get_app_dependencies(request).catalog_service


def get_book_store(request: Request) -> BookStore:
    """Get the book store instance."""
    return get_app_dependencies(request).book_store


def get_app_config(request: Request) -> ConfigData:
    """Get the configuration the application was created with."""
    return request.app.state.config
