"""Single HTTP delivery attempt.

One POST to one URL with a bounded timeout; the response is classified
into a DeliveryOutcome instead of raising, so the retry policy can decide
what to do next.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from themepush.models import DeliveryOutcome, WebhookPayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "Theme-Pusher/1.0"


def parse_response_body(text: str) -> Any:
    """Parse a response body as JSON, wrapping non-JSON text as ``{"text": ...}``."""
    try:
        return json.loads(text)
    except ValueError:
        return {"text": text}


class WebhookSender:
    """Sends webhook payloads over HTTP.

    Non-2xx statuses and transport errors (timeouts, refused connections)
    are both reported as failed outcomes; 4xx is not distinguished from 5xx.

    Example:
        ```python
        sender = WebhookSender(timeout_seconds=10.0)
        outcome = await sender.send("https://example.com/hooks/theme", payload)
        ```
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the sender.

        Args:
            timeout_seconds: Per-request timeout.
            user_agent: Value of the User-Agent header.
            client: Shared client to reuse across deliveries. When None, a
                client is opened for each request.
        """
        self._timeout = timeout_seconds
        self._user_agent = user_agent
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
        }

    async def send(self, url: str, payload: WebhookPayload) -> DeliveryOutcome:
        """POST a payload to a URL and classify the result."""
        body = payload.to_json().encode("utf-8")

        try:
            if self._client is not None:
                response = await self._client.post(
                    url, content=body, headers=self.headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, content=body, headers=self.headers)
        except httpx.TimeoutException:
            logger.warning("Webhook to %s timed out after %.1fs", url, self._timeout)
            return DeliveryOutcome.failed(f"Request timed out after {self._timeout:g}s")
        except httpx.HTTPError as e:
            logger.warning("Webhook to %s failed: %s", url, e)
            return DeliveryOutcome.failed(str(e) or type(e).__name__)

        text = response.text
        logger.debug("Webhook response from %s (%d): %s", url, response.status_code, text[:200])

        if response.is_success:
            return DeliveryOutcome.ok(
                status_code=response.status_code,
                data=parse_response_body(text),
            )

        return DeliveryOutcome.failed(
            f"HTTP {response.status_code}: {response.reason_phrase} - {text}",
            status_code=response.status_code,
        )
