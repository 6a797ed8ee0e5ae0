"""Theme delivery over webhooks.

Provides HMAC-signed webhook delivery with exponential backoff retry and
concurrent fan-out to registered projects.

Example:
    ```python
    from themepush.webhooks import ThemeDispatcher, push_theme

    # Using dispatcher directly
    dispatcher = ThemeDispatcher(projects, themes, delivery_log)
    result = await dispatcher.push_one("prj_123", "thm_456")

    # Using convenience function (every active project)
    summary = await push_theme(projects, themes, delivery_log, theme_id="thm_456")
    ```
"""

from .dispatcher import ThemeDispatcher, build_payload, push_theme
from .retry import RetryPolicy
from .sender import WebhookSender, parse_response_body
from .signing import (
    compute_signature,
    sign_payload,
    verify_payload,
    verify_request_body,
    verify_signature,
)

__all__ = [
    "RetryPolicy",
    "ThemeDispatcher",
    "WebhookSender",
    "build_payload",
    "compute_signature",
    "parse_response_body",
    "push_theme",
    "sign_payload",
    "verify_payload",
    "verify_request_body",
    "verify_signature",
]
