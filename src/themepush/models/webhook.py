"""Webhook models for theme delivery.

Provides the wire payload sent to delivery targets, the append-only
delivery log entry, and the transient per-attempt and per-target results.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .base import generate_id, utc_timestamp
from .project import Project
from .theme import Theme, ThemeData

# Final outcome recorded in the delivery log
DeliveryStatus = Literal["SUCCESS", "FAILED"]


class WebhookPayload(BaseModel):
    """Payload POSTed to a project's webhook URL.

    Serializes (by alias) to ``theme``, ``themeId``, ``themeName``,
    ``timestamp`` and, when signed, ``signature``, in that order. The
    signature covers ``unsigned_json()``, so receivers verify by dropping
    ``signature`` and re-serializing the remaining object compactly.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    theme: ThemeData
    theme_id: str = Field(alias="themeId")
    theme_name: str = Field(alias="themeName")
    timestamp: str = Field(default_factory=utc_timestamp)
    signature: str | None = Field(default=None)

    @classmethod
    def for_theme(cls, theme: Theme, timestamp: str | None = None) -> WebhookPayload:
        """Build an unsigned payload snapshotting the theme's content."""
        return cls(
            theme=theme.data,
            theme_id=theme.id,
            theme_name=theme.name,
            timestamp=timestamp or utc_timestamp(),
        )

    def unsigned_json(self) -> str:
        """Canonical signing input: compact JSON without the signature field."""
        return self.model_dump_json(by_alias=True, exclude={"signature"})

    def to_json(self) -> str:
        """Request body; the signature key is omitted when unsigned."""
        if self.signature is None:
            return self.unsigned_json()
        return self.model_dump_json(by_alias=True)

    def with_signature(self, signature: str | None) -> WebhookPayload:
        """Return a copy carrying the given signature."""
        return self.model_copy(update={"signature": signature})


class DeliveryOutcome(BaseModel):
    """Classified result of delivering to one endpoint.

    Attributes:
        success: True when the endpoint answered 2xx.
        status_code: HTTP status, None on transport failures.
        data: Parsed response body (JSON, or ``{"text": ...}`` fallback).
        error: Failure description; None on success.
        attempts: Number of attempts made when the outcome was produced.
    """

    model_config = ConfigDict(extra="forbid")

    success: bool
    status_code: int | None = None
    data: Any = None
    error: str | None = None
    attempts: int = Field(default=1, ge=1)

    @classmethod
    def ok(cls, status_code: int, data: Any = None) -> DeliveryOutcome:
        """Successful delivery."""
        return cls(success=True, status_code=status_code, data=data)

    @classmethod
    def failed(cls, error: str, status_code: int | None = None) -> DeliveryOutcome:
        """Retryable remote or transport failure."""
        return cls(success=False, status_code=status_code, error=error)

    def response_json(self) -> str:
        """Serialized form stored in the delivery log."""
        return self.model_dump_json(include={"success", "status_code", "data"})


class DeliveryLogEntry(BaseModel):
    """Append-only record of one dispatch to one project.

    One entry is written per dispatch, after retries are exhausted or a
    delivery succeeds, never per attempt.

    Attributes:
        id: Unique identifier for this entry.
        project_id: Target project, as supplied by the caller.
        theme_id: Theme that was pushed.
        status: SUCCESS or FAILED.
        response: Serialized response of the final attempt.
        error: Terminal error message.
        created_at: When the entry was recorded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: generate_id("dlv"))
    project_id: str
    theme_id: str | None = None
    status: DeliveryStatus
    response: str | None = None
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class DeliveryResult(BaseModel):
    """Outcome of pushing a theme to one project (not persisted)."""

    model_config = ConfigDict(extra="forbid")

    project_id: str
    project: Project | None = None
    success: bool
    error: str | None = None
    status_code: int | None = None
    attempts: int = Field(default=0, ge=0, description="Network attempts made")


class PushSummary(BaseModel):
    """Aggregated outcome of a fan-out push, aligned with target order."""

    model_config = ConfigDict(extra="forbid")

    theme_id: str
    results: list[DeliveryResult] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_count(self) -> int:
        return len(self.results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failure_count(self) -> int:
        return self.total_count - self.success_count

    @property
    def message(self) -> str:
        return f"Theme updated on {self.success_count}/{self.total_count} websites"


__all__ = [
    "DeliveryLogEntry",
    "DeliveryOutcome",
    "DeliveryResult",
    "DeliveryStatus",
    "PushSummary",
    "WebhookPayload",
]
