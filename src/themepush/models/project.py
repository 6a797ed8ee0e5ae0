"""Project models: remote endpoints that receive theme updates."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, SecretStr

from .base import generate_id

# Hosting platform of the receiving site
Platform = Literal["VERCEL", "NETLIFY", "CUSTOM", "GITHUB"]


class Project(BaseModel):
    """A registered delivery target.

    Attributes:
        id: Unique identifier for this project.
        name: Display name.
        webhook_url: Absolute URL that receives theme payloads.
        api_key: Shared secret used only to sign payloads. Never logged;
            ``None`` or empty means deliveries go out unsigned.
        is_active: Only active projects receive pushes.
        platform: Hosting platform of the receiving site.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: generate_id("prj"))
    name: str = Field(default="", description="Display name")
    webhook_url: HttpUrl = Field(description="Endpoint receiving theme payloads")
    api_key: SecretStr | None = Field(default=None, description="HMAC signing secret")
    is_active: bool = Field(default=True, description="Whether the project accepts pushes")
    platform: Platform = Field(default="CUSTOM", description="Hosting platform")

    @property
    def signing_key(self) -> str | None:
        """Plain-text signing secret, or None when the project has none."""
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None


__all__ = [
    "Platform",
    "Project",
]
