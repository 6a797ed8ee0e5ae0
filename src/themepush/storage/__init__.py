"""Storage ports and in-memory backends for Themepush."""

from .base import DeliveryLogSink, ProjectStore, ThemeStore
from .memory import InMemoryDeliveryLog, InMemoryProjectStore, InMemoryThemeStore

__all__ = [
    "DeliveryLogSink",
    "InMemoryDeliveryLog",
    "InMemoryProjectStore",
    "InMemoryThemeStore",
    "ProjectStore",
    "ThemeStore",
]
