"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from content_api.config import APP_VERSION, Settings
from content_api.middleware.auth import APIKeyMiddleware
from content_api.middleware.cors import configure_cors
from content_api.middleware.logging import RequestLoggingMiddleware
from content_api.routes import health, search

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown.

    The search engine is stateless, so there is nothing to warm up or
    tear down.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "api_startup",
        host=settings.host,
        port=settings.port,
        auth_enabled=bool(settings.key),
        slow_search_ms=settings.slow_search_ms,
    )
    try:
        yield
    finally:
        logger.info("api_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Content Search API",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings

    configure_cors(app, settings.cors_origins)
    if settings.key:
        app.add_middleware(APIKeyMiddleware, api_key=settings.key)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(search.router, prefix="/api/v1")

    return app
