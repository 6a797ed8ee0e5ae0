"""Storage ports consumed by the dispatcher.

The dispatcher only reads projects and themes and only appends delivery
log entries; any backend satisfying these protocols can be injected.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from themepush.models import DeliveryLogEntry, Project, Theme


@runtime_checkable
class ProjectStore(Protocol):
    """Read access to delivery targets."""

    async def get_project(self, project_id: str) -> Project | None:
        """Return the project, or None when it doesn't exist."""
        ...

    async def list_active(self) -> list[Project]:
        """Return every project currently accepting pushes."""
        ...


@runtime_checkable
class ThemeStore(Protocol):
    """Read access to themes."""

    async def get_theme(self, theme_id: str) -> Theme | None:
        """Return the theme, or None when it doesn't exist."""
        ...


@runtime_checkable
class DeliveryLogSink(Protocol):
    """Durable, append-only delivery log."""

    async def append(self, entry: DeliveryLogEntry) -> None:
        """Persist one entry. Existing entries are never modified."""
        ...
