"""Themepush: push themes to connected websites.

Delivers a theme (colors, radii, effects) to registered projects over
HMAC-signed webhooks, retrying failing endpoints with exponential backoff
and recording one delivery log entry per dispatch.

Quick Start:
    from themepush.storage import InMemoryDeliveryLog, InMemoryProjectStore, InMemoryThemeStore
    from themepush.webhooks import ThemeDispatcher

    dispatcher = ThemeDispatcher(projects, themes, InMemoryDeliveryLog())

    # Push to every active project
    summary = await dispatcher.push_many(theme_id="thm_456")
    print(summary.message)  # "Theme updated on 3/3 websites"
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, settings

# Exceptions
from .exceptions import (
    ConfigurationError,
    NotFoundError,
    ProjectInactiveError,
    ProjectNotFoundError,
    ThemeNotFoundError,
    ThemePushError,
)

# Logging
from .logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

# Models
from .models import (
    DeliveryLogEntry,
    DeliveryResult,
    Project,
    PushSummary,
    Theme,
    ThemeData,
    WebhookPayload,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "settings",
    # Exceptions
    "ConfigurationError",
    "NotFoundError",
    "ProjectInactiveError",
    "ProjectNotFoundError",
    "ThemeNotFoundError",
    "ThemePushError",
    # Logging
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # Models
    "DeliveryLogEntry",
    "DeliveryResult",
    "Project",
    "PushSummary",
    "Theme",
    "ThemeData",
    "WebhookPayload",
]
