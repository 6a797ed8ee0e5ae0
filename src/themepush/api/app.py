"""FastAPI application for Themepush."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from themepush import __version__
from themepush.config import Settings
from themepush.exceptions import NotFoundError, ThemePushError
from themepush.logging import configure_logging, get_logger
from themepush.storage import InMemoryDeliveryLog, InMemoryProjectStore, InMemoryThemeStore
from themepush.webhooks import ThemeDispatcher

from .router import router, set_dispatcher

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    dispatcher: ThemeDispatcher | None = None,
) -> FastAPI:
    """Create a FastAPI application.

    Args:
        settings: Optional settings. Uses environment if None.
        dispatcher: Dispatcher wired to real stores. When None, an
            in-memory dispatcher is built on startup (useful for demos).

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(level=settings.log_level, format=settings.log_format)
        logger.info(
            "Starting Themepush API",
            log_level=settings.log_level,
            max_attempts=settings.max_attempts,
            request_timeout_seconds=settings.request_timeout_seconds,
        )

        set_dispatcher(
            dispatcher
            or ThemeDispatcher.from_settings(
                settings,
                projects=InMemoryProjectStore(),
                themes=InMemoryThemeStore(),
                log_sink=InMemoryDeliveryLog(),
            )
        )

        yield

        set_dispatcher(None)

    app = FastAPI(
        title="Themepush",
        description="Push themes to connected websites over signed webhooks.",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        """Handle not found errors with 404 status."""
        logger.info(
            "Resource not found",
            resource_type=exc.resource_type,
            resource_id=exc.resource_id,
            path=str(request.url),
        )
        return JSONResponse(status_code=404, content=exc.to_dict())

    @app.exception_handler(ThemePushError)
    async def themepush_error_handler(request: Request, exc: ThemePushError) -> JSONResponse:
        """Handle all other Themepush errors with 500 status."""
        logger.error("Themepush error", error=exc.message, code=exc.code, path=str(request.url))
        return JSONResponse(status_code=500, content=exc.to_dict())

    app.include_router(router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
