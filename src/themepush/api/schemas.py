"""Pydantic schemas for API request/response models.

Field names are camelCase on the wire, matching the payloads the
dashboard front end already sends and expects.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from themepush.models import DeliveryResult, PushSummary


class PushRequest(BaseModel):
    """Request body for pushing a theme.

    Attributes:
        project_ids: Projects to push to. Omit to push to every active
            project; an empty list pushes to none.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    project_ids: list[str] | None = Field(
        default=None,
        alias="projectIds",
        description="Target project IDs; all active projects when omitted, none when empty",
    )


class PushResultResponse(BaseModel):
    """Outcome for one target project."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    success: bool
    error: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")
    attempts: int = 0

    @classmethod
    def from_result(cls, result: DeliveryResult) -> PushResultResponse:
        return cls(
            project_id=result.project_id,
            success=result.success,
            error=result.error,
            status_code=result.status_code,
            attempts=result.attempts,
        )


class PushResponse(BaseModel):
    """Response for a theme push.

    Attributes:
        message: Human-readable summary, e.g. "Theme updated on 2/3 websites".
        success_count: Targets that accepted the theme.
        total_count: Targets attempted.
        results: Per-target outcomes in target order.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    success_count: int = Field(alias="successCount")
    total_count: int = Field(alias="totalCount")
    results: list[PushResultResponse]

    @classmethod
    def from_summary(cls, summary: PushSummary) -> PushResponse:
        return cls(
            message=summary.message,
            success_count=summary.success_count,
            total_count=summary.total_count,
            results=[PushResultResponse.from_result(result) for result in summary.results],
        )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    model_config = ConfigDict(extra="forbid")

    status: Literal["healthy", "unhealthy"]
    version: str
