"""In-memory storage backends.

Used by the API's default wiring, by local demos and by tests. Records are
immutable pydantic models, so handing them out directly is safe.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from themepush.models import DeliveryLogEntry, Project, Theme

logger = logging.getLogger(__name__)


class InMemoryProjectStore:
    """Project store backed by a dict, preserving registration order."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects: dict[str, Project] = {}
        for project in projects:
            self.add(project)

    def add(self, project: Project) -> Project:
        """Register (or replace) a project."""
        self._projects[project.id] = project
        return project

    async def get_project(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    async def list_active(self) -> list[Project]:
        return [project for project in self._projects.values() if project.is_active]


class InMemoryThemeStore:
    """Theme store backed by a dict."""

    def __init__(self, themes: Iterable[Theme] = ()) -> None:
        self._themes: dict[str, Theme] = {}
        for theme in themes:
            self.add(theme)

    def add(self, theme: Theme) -> Theme:
        """Register (or replace) a theme."""
        self._themes[theme.id] = theme
        return theme

    async def get_theme(self, theme_id: str) -> Theme | None:
        return self._themes.get(theme_id)


class InMemoryDeliveryLog:
    """Append-only delivery log kept in a list.

    Entries are stored in the order their dispatches finished, which
    across targets is not the order the targets were given.
    """

    def __init__(self) -> None:
        self._entries: list[DeliveryLogEntry] = []
        self._lock = asyncio.Lock()

    async def append(self, entry: DeliveryLogEntry) -> None:
        async with self._lock:
            self._entries.append(entry)
        logger.debug(
            "Delivery logged: %s for project %s (%s)", entry.id, entry.project_id, entry.status
        )

    def entries(self) -> list[DeliveryLogEntry]:
        """All entries, oldest first."""
        return list(self._entries)

    def for_project(self, project_id: str) -> list[DeliveryLogEntry]:
        """Entries recorded against one project, oldest first."""
        return [entry for entry in self._entries if entry.project_id == project_id]

    def latest(self, project_id: str) -> DeliveryLogEntry | None:
        """Most recent entry for a project, if any."""
        entries = self.for_project(project_id)
        return entries[-1] if entries else None

    def __len__(self) -> int:
        return len(self._entries)
