"""Centralized error transformation for API routes.

Maps catalog errors to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from src.catalog.core.errors import (
    BookAlreadyExistsError,
    BookNotFoundError,
    CatalogError,
    CollaboratorError,
    CollaboratorUnavailableError,
    IsbnRejectedError,
    NotificationFailedError,
    StorageFailureError,
)

CATALOG_ERROR_STATUS_MAP: dict[type[CatalogError], int] = {
    BookAlreadyExistsError: 409,
    IsbnRejectedError: 422,
    BookNotFoundError: 404,
    CollaboratorUnavailableError: 503,
    CollaboratorError: 502,
    NotificationFailedError: 502,
    StorageFailureError: 503,
}


def status_for(error: CatalogError) -> int:
    """Most specific status registered for the error's class hierarchy."""
    for cls in type(error).__mro__:
        if cls in CATALOG_ERROR_STATUS_MAP:
            return CATALOG_ERROR_STATUS_MAP[cls]
    return 500


def map_catalog_error(error: CatalogError) -> HTTPException:
    """Map a catalog error to an HTTPException.

    Args:
        error: The catalog error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }
    if isinstance(error, NotificationFailedError):
        detail["isbn"] = error.book.isbn

    return HTTPException(status_code=status_for(error), detail=detail)
