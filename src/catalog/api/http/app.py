"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies, build_dependencies
from src.catalog.api.http.routers.book import router as book_router
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if request.app.state.config.app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


async def startup(app: FastAPI) -> None:
    """Build application-wide dependencies unless they were injected."""
    config: ConfigData = app.state.config
    logger.info("Starting up application in {} environment", config.app.environment)

    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = build_dependencies(config)
        app.state.owns_dependencies = True


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None and getattr(app.state, "owns_dependencies", False):
        await app_dependencies.aclose()
        app.state.app_dependencies = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


def create_app(
    dependencies: ApplicationDependencies | None = None,
    config: ConfigData | None = None,
) -> FastAPI:
    """Create the catalog API.

    Args:
        dependencies: Pre-built dependencies (tests); built from ``config`` at
            startup when omitted.
        config: Configuration for this app; defaults to the current context.
    """
    config = config or get_config()
    production = config.app.environment == "production"

    application = FastAPI(
        title="Book Catalog",
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )
    application.state.config = config
    application.state.app_dependencies = dependencies
    application.state.owns_dependencies = False

    if production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.add_middleware(SecurityHeadersMiddleware)
    application.middleware("http")(log_requests)

    application.include_router(health_router)
    application.include_router(book_router)
    return application


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # request logs come from log_requests
    )
