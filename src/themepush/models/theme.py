"""Theme models.

A theme is read-only from the dispatcher's point of view: it is snapshotted
into every webhook payload but never modified.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import generate_id


def _whole_floats_to_int(radius: dict[str, int | float]) -> dict[str, int | float]:
    """Render 16.0 as 16 so the signed JSON matches what JS receivers produce."""
    return {
        key: int(value) if isinstance(value, float) and value.is_integer() else value
        for key, value in radius.items()
    }


class ThemeData(BaseModel):
    """Theme content blocks sent to delivery targets.

    Attributes:
        colors: Semantic color name -> color string (e.g. "primary": "#3b82f6").
        radius: Semantic radius name -> pixel value.
        effects: Effect name -> enabled flag.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    colors: dict[str, str] = Field(default_factory=dict, description="Color tokens")
    # whole numbers go out as ints, so 8 and 8.0 are both rendered as 8
    radius: dict[str, int | float] = Field(default_factory=dict, description="Radius tokens (px)")
    effects: dict[str, bool] = Field(default_factory=dict, description="Effect toggles")

    @field_validator("radius")
    @classmethod
    def _normalize_radius(cls, value: dict[str, int | float]) -> dict[str, int | float]:
        return _whole_floats_to_int(value)


class Theme(BaseModel):
    """A stored theme.

    Attributes:
        id: Unique identifier for this theme.
        name: Display name, sent as ``themeName``.
        description: Optional human-readable description.
        colors: Color block.
        radius: Radius block.
        effects: Effects block.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: generate_id("thm"))
    name: str = Field(min_length=1, description="Theme display name")
    description: str | None = Field(default=None, description="Human-readable description")
    colors: dict[str, str] = Field(default_factory=dict)
    radius: dict[str, int | float] = Field(default_factory=dict)
    effects: dict[str, bool] = Field(default_factory=dict)

    @field_validator("colors", "radius", "effects", mode="before")
    @classmethod
    def _decode_json_block(cls, value: Any) -> Any:
        """Accept blocks stored as JSON text columns."""
        if isinstance(value, (str, bytes)):
            return json.loads(value)
        return value

    @field_validator("radius")
    @classmethod
    def _normalize_radius(cls, value: dict[str, int | float]) -> dict[str, int | float]:
        return _whole_floats_to_int(value)

    @property
    def data(self) -> ThemeData:
        """Snapshot of the three content blocks."""
        return ThemeData(colors=self.colors, radius=self.radius, effects=self.effects)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Theme:
        """Build a theme from a storage row.

        Content blocks may be JSON strings; unrelated columns such as
        ``userId`` or ``isPublic`` are ignored.
        """
        return cls(
            id=record["id"],
            name=record["name"],
            description=record.get("description"),
            colors=record.get("colors") or {},
            radius=record.get("radius") or {},
            effects=record.get("effects") or {},
        )


__all__ = [
    "Theme",
    "ThemeData",
]
