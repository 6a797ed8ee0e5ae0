"""Configuration management for Themepush."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Themepush configuration.

    All values can be set through ``THEMEPUSH_``-prefixed environment
    variables or a ``.env`` file, e.g. ``THEMEPUSH_MAX_ATTEMPTS=5``.

    The retry delay after a failed attempt ``n`` (1-indexed) is
    ``backoff_multiplier * backoff_base ** n``, which yields 2s, 4s, 8s
    with the defaults.
    """

    # Delivery
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Timeout for a single webhook POST",
    )
    user_agent: str = Field(
        default="Theme-Pusher/1.0",
        min_length=1,
        description="User-Agent header sent with every delivery",
    )

    # Retry
    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total delivery attempts per target, including the first",
    )
    backoff_base: float = Field(
        default=2.0,
        ge=1.0,
        description="Exponential base for the delay between attempts",
    )
    backoff_multiplier: float = Field(
        default=1.0,
        ge=0.0,
        description="Scale applied to every backoff delay (tests shrink this)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: json for production, text for development",
    )

    model_config = {
        "env_prefix": "THEMEPUSH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
