"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_app_config, get_book_store
from src.catalog.core.storage import BookStore
from src.catalog.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "catalog"}


@router.get("/ready", response_model=None)
async def readiness(
    book_store: BookStore = Depends(get_book_store),
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any] | JSONResponse:
    """Readiness check - returns 503 when the book store is unavailable."""
    store_healthy = book_store.is_available()
    checks: dict[str, Any] = {
        "book_store": {
            "status": "healthy" if store_healthy else "unhealthy",
            "type": config.catalog.storage,
        },
        "isbn_checker": {"enabled": config.catalog.isbn_checker.enabled},
        "notifier": {"enabled": config.catalog.notifier.enabled},
    }

    body = {"status": "ready" if store_healthy else "not_ready", "checks": checks}
    if not store_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
