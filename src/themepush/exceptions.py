"""Themepush exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from ThemePushError for easy catching.
"""

from __future__ import annotations


class ThemePushError(Exception):
    """Base exception for all Themepush errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code for API responses.
    """

    code: str = "themepush_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class NotFoundError(ThemePushError):
    """Resource not found.

    Raised when a requested project or theme doesn't exist.

    Attributes:
        resource_type: Type of resource (e.g., "project", "theme").
        resource_id: ID of the missing resource.
    """

    code: str = "not_found"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} not found: {resource_id}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "resource_type": self.resource_type,
                "resource_id": self.resource_id,
                "message": self.message,
            }
        }


class ProjectNotFoundError(NotFoundError):
    """Delivery target does not exist."""

    def __init__(self, project_id: str) -> None:
        super().__init__("project", project_id)


class ThemeNotFoundError(NotFoundError):
    """Theme to deliver does not exist."""

    def __init__(self, theme_id: str) -> None:
        super().__init__("theme", theme_id)


class ProjectInactiveError(ThemePushError):
    """Delivery target exists but is not accepting theme pushes.

    Attributes:
        project_id: ID of the inactive project.
    """

    code: str = "project_inactive"

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(f"project is inactive: {project_id}")


class ConfigurationError(ThemePushError):
    """Configuration error.

    Raised when required configuration is missing or invalid.
    """

    code: str = "configuration_error"
