"""FastAPI router for theme push endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status

from themepush import __version__
from themepush.webhooks import ThemeDispatcher

from .schemas import HealthResponse, PushRequest, PushResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Dispatcher instance (set by app lifespan)
_dispatcher: ThemeDispatcher | None = None


def set_dispatcher(dispatcher: ThemeDispatcher | None) -> None:
    """Set the global dispatcher instance."""
    global _dispatcher
    _dispatcher = dispatcher


async def get_dispatcher() -> ThemeDispatcher:
    """Dependency to get the ThemeDispatcher instance."""
    if _dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dispatcher not initialized",
        )
    return _dispatcher


DispatcherDep = Annotated[ThemeDispatcher, Depends(get_dispatcher)]


@router.get("/health", response_model=HealthResponse, tags=["system"])
async def health_check() -> HealthResponse:
    """Report whether the dispatcher is ready to accept pushes."""
    return HealthResponse(
        status="healthy" if _dispatcher is not None else "unhealthy",
        version=__version__,
    )


@router.post("/themes/{theme_id}/push", response_model=PushResponse, tags=["themes"])
async def push_theme(
    theme_id: str,
    dispatcher: DispatcherDep,
    request: Annotated[PushRequest | None, Body()] = None,
) -> PushResponse:
    """Push a theme to the given projects, or to every active project.

    Partial failure is not an error: the response reports how many
    targets accepted the theme along with each target's outcome.

    Raises:
        ThemeNotFoundError: The theme doesn't exist (mapped to 404).
    """
    await dispatcher.require_theme(theme_id)

    project_ids = request.project_ids if request else None
    summary = await dispatcher.push_many(theme_id, project_ids)

    logger.info(
        "Push request for theme %s finished: %d/%d succeeded",
        theme_id,
        summary.success_count,
        summary.total_count,
    )
    return PushResponse.from_summary(summary)
