"""Theme dispatcher: push one theme to one or many projects.

Each target runs its own chain (resolve, sign, deliver with retries, log)
as an independent asyncio task. A failing target never affects the others
and every dispatch leaves exactly one delivery log entry.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from themepush.exceptions import (
    ProjectInactiveError,
    ProjectNotFoundError,
    ThemeNotFoundError,
    ThemePushError,
)
from themepush.models import (
    DeliveryLogEntry,
    DeliveryOutcome,
    DeliveryResult,
    Project,
    PushSummary,
    Theme,
    WebhookPayload,
)

from .retry import RetryPolicy
from .sender import WebhookSender
from .signing import sign_payload

if TYPE_CHECKING:
    from themepush.config import Settings
    from themepush.storage import DeliveryLogSink, ProjectStore, ThemeStore

logger = logging.getLogger(__name__)


def build_payload(theme: Theme, secret: str | None = None) -> WebhookPayload:
    """Snapshot a theme into a payload, signed when a secret is given."""
    payload = WebhookPayload.for_theme(theme)
    return payload.with_signature(sign_payload(payload, secret))


class ThemeDispatcher:
    """Delivers themes to registered projects over webhooks.

    Holds no state besides its collaborators, so one instance can serve
    concurrent pushes.

    Example:
        ```python
        dispatcher = ThemeDispatcher(projects, themes, delivery_log)

        # One project
        result = await dispatcher.push_one("prj_123", "thm_456")

        # Selected projects, or every active project when omitted
        summary = await dispatcher.push_many("thm_456", ["prj_123", "prj_789"])
        print(summary.message)  # "Theme updated on 2/2 websites"
        ```
    """

    def __init__(
        self,
        projects: ProjectStore,
        themes: ThemeStore,
        log_sink: DeliveryLogSink,
        sender: WebhookSender | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            projects: Source of delivery targets.
            themes: Source of themes.
            log_sink: Append-only delivery log.
            sender: HTTP sender. Defaults to a 10s-timeout sender.
            retry_policy: Retry policy. Defaults to 3 attempts, 2s/4s backoff.
        """
        self._projects = projects
        self._themes = themes
        self._log = log_sink
        self._sender = sender or WebhookSender()
        self._retry = retry_policy or RetryPolicy()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        projects: ProjectStore,
        themes: ThemeStore,
        log_sink: DeliveryLogSink,
    ) -> ThemeDispatcher:
        """Build a dispatcher whose sender and retry policy follow settings."""
        return cls(
            projects,
            themes,
            log_sink,
            sender=WebhookSender(
                timeout_seconds=settings.request_timeout_seconds,
                user_agent=settings.user_agent,
            ),
            retry_policy=RetryPolicy.from_settings(settings),
        )

    async def push_one(self, project_id: str, theme_id: str) -> DeliveryResult:
        """Push a theme to a single project.

        Precondition failures (unknown or inactive project, unknown theme)
        are not retried and make no network call. Every call, successful or
        not, appends exactly one log entry for ``project_id``.

        Args:
            project_id: Target project.
            theme_id: Theme to deliver.

        Returns:
            DeliveryResult; failures are reported, not raised.
        """
        try:
            project, theme = await self._resolve(project_id, theme_id)
        except ThemePushError as e:
            logger.warning("Theme push to %s rejected: %s", project_id, e.message)
            await self._log.append(
                DeliveryLogEntry(
                    project_id=project_id,
                    theme_id=theme_id,
                    status="FAILED",
                    error=e.message,
                )
            )
            return DeliveryResult(project_id=project_id, success=False, error=e.message)

        payload = build_payload(theme, project.signing_key)
        if payload.signature is None:
            logger.info("Project %s has no API key, sending unsigned payload", project.id)

        url = str(project.webhook_url)
        try:
            outcome = await self._retry.run(lambda: self._sender.send(url, payload))
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.exception("Theme %s delivery to %s raised: %s", theme.id, project.id, error)
            await self._log.append(
                DeliveryLogEntry(
                    project_id=project.id,
                    theme_id=theme.id,
                    status="FAILED",
                    error=error,
                )
            )
            return DeliveryResult(
                project_id=project.id, project=project, success=False, error=error
            )

        await self._log.append(self._log_entry(project.id, theme.id, outcome))

        if outcome.success:
            logger.info(
                "Theme %s delivered to %s (status %s, %d attempts)",
                theme.id,
                project.id,
                outcome.status_code,
                outcome.attempts,
            )
        else:
            logger.warning(
                "Theme %s not delivered to %s after %d attempts: %s",
                theme.id,
                project.id,
                outcome.attempts,
                outcome.error,
            )

        return DeliveryResult(
            project_id=project.id,
            project=project,
            success=outcome.success,
            error=outcome.error,
            status_code=outcome.status_code,
            attempts=outcome.attempts,
        )

    async def push_many(
        self,
        theme_id: str,
        project_ids: Sequence[str] | None = None,
    ) -> PushSummary:
        """Push a theme to several projects concurrently.

        With ``project_ids`` given, each listed project is targeted (inactive
        or unknown ones fail individually); an empty list targets nobody.
        Only ``None`` broadcasts to every active project.

        Args:
            theme_id: Theme to deliver.
            project_ids: Explicit targets; None means broadcast.

        Returns:
            PushSummary whose results follow the target order.
        """
        if project_ids is not None:
            targets = list(project_ids)
        else:
            targets = [project.id for project in await self._projects.list_active()]

        if not targets:
            logger.debug("No projects to push theme %s to", theme_id)
            return PushSummary(theme_id=theme_id)

        outcomes = await asyncio.gather(
            *(self.push_one(project_id, theme_id) for project_id in targets),
            return_exceptions=True,
        )

        results: list[DeliveryResult] = []
        for project_id, outcome in zip(targets, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error("Theme push to %s crashed: %s", project_id, outcome)
                results.append(
                    DeliveryResult(
                        project_id=project_id,
                        success=False,
                        error=str(outcome) or type(outcome).__name__,
                    )
                )
            else:
                results.append(outcome)

        summary = PushSummary(theme_id=theme_id, results=results)
        logger.info("Theme %s pushed: %s", theme_id, summary.message)
        return summary

    async def require_theme(self, theme_id: str) -> Theme:
        """Return the theme or raise ThemeNotFoundError."""
        theme = await self._themes.get_theme(theme_id)
        if theme is None:
            raise ThemeNotFoundError(theme_id)
        return theme

    async def _resolve(self, project_id: str, theme_id: str) -> tuple[Project, Theme]:
        project = await self._projects.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        if not project.is_active:
            raise ProjectInactiveError(project_id)

        return project, await self.require_theme(theme_id)

    @staticmethod
    def _log_entry(project_id: str, theme_id: str, outcome: DeliveryOutcome) -> DeliveryLogEntry:
        if outcome.success:
            return DeliveryLogEntry(
                project_id=project_id,
                theme_id=theme_id,
                status="SUCCESS",
                response=outcome.response_json(),
            )
        return DeliveryLogEntry(
            project_id=project_id,
            theme_id=theme_id,
            status="FAILED",
            response=outcome.response_json(),
            error=outcome.error,
        )


async def push_theme(
    projects: ProjectStore,
    themes: ThemeStore,
    log_sink: DeliveryLogSink,
    theme_id: str,
    project_ids: Sequence[str] | None = None,
) -> PushSummary:
    """Convenience function to push a theme with default delivery settings.

    Args:
        projects: Source of delivery targets.
        themes: Source of themes.
        log_sink: Append-only delivery log.
        theme_id: Theme to deliver.
        project_ids: Explicit targets; None means every active project.

    Returns:
        PushSummary for the push.
    """
    dispatcher = ThemeDispatcher(projects, themes, log_sink)
    return await dispatcher.push_many(theme_id, project_ids)
