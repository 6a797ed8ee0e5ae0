"""Data models for Themepush.

Records read by the dispatcher:
    - Theme / ThemeData: Theme content snapshotted into payloads
    - Project: Registered delivery target

Delivery types:
    - WebhookPayload: Wire entity POSTed to a target
    - DeliveryOutcome: Classified result of delivering to one endpoint
    - DeliveryLogEntry: Append-only audit record, one per dispatch
    - DeliveryResult / PushSummary: Per-target and aggregated results
"""

from .base import generate_id, utc_timestamp
from .project import Platform, Project
from .theme import Theme, ThemeData
from .webhook import (
    DeliveryLogEntry,
    DeliveryOutcome,
    DeliveryResult,
    DeliveryStatus,
    PushSummary,
    WebhookPayload,
)

__all__ = [
    # Helpers
    "generate_id",
    "utc_timestamp",
    # Records
    "Platform",
    "Project",
    "Theme",
    "ThemeData",
    # Delivery
    "DeliveryLogEntry",
    "DeliveryOutcome",
    "DeliveryResult",
    "DeliveryStatus",
    "PushSummary",
    "WebhookPayload",
]
