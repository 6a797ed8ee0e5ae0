"""Bounded retry with exponential backoff for webhook deliveries.

Failed deliveries are values (DeliveryOutcome with success=False), not
exceptions, so tenacity retries on the *result*. After the last attempt
the final failed outcome is returned to the caller instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from themepush.exceptions import ConfigurationError
from themepush.models import DeliveryOutcome

if TYPE_CHECKING:
    from themepush.config import Settings

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def _is_failure(outcome: DeliveryOutcome) -> bool:
    return not outcome.success


def _last_outcome(retry_state: RetryCallState) -> DeliveryOutcome:
    """Hand back the final failed outcome once attempts are exhausted."""
    if retry_state.outcome is None:
        return DeliveryOutcome.failed("No delivery attempt was made")
    outcome: DeliveryOutcome = retry_state.outcome.result()
    logger.warning(
        "Webhook delivery failed after %d attempts: %s",
        retry_state.attempt_number,
        outcome.error,
    )
    return outcome


def _log_retry(retry_state: RetryCallState) -> None:
    if retry_state.outcome is None or retry_state.next_action is None:
        return
    outcome: DeliveryOutcome = retry_state.outcome.result()
    logger.info(
        "Webhook attempt %d failed (%s), retrying in %.1fs",
        retry_state.attempt_number,
        outcome.error,
        retry_state.next_action.sleep,
    )


class RetryPolicy:
    """Retries a delivery until it succeeds or attempts run out.

    The wait after failed attempt ``n`` (1-indexed) is
    ``backoff_multiplier * backoff_base ** n``: 2s, 4s, 8s with defaults.
    There is no jitter. Waiting suspends on ``sleep`` (``asyncio.sleep``
    by default) so other deliveries keep running.

    Example:
        ```python
        policy = RetryPolicy(max_attempts=3)
        outcome = await policy.run(lambda: sender.send(url, payload))
        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff_base: float = 2.0,
        backoff_multiplier: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self.backoff_multiplier = backoff_multiplier
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, sleep: Sleep = asyncio.sleep) -> RetryPolicy:
        """Build a policy from application settings."""
        return cls(
            max_attempts=settings.max_attempts,
            backoff_base=settings.backoff_base,
            backoff_multiplier=settings.backoff_multiplier,
            sleep=sleep,
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt ``attempt`` (1-indexed)."""
        return float(self.backoff_multiplier * self.backoff_base**attempt)

    async def run(self, work: Callable[[], Awaitable[DeliveryOutcome]]) -> DeliveryOutcome:
        """Run ``work`` with retries.

        Args:
            work: Zero-argument coroutine factory performing one attempt.

        Returns:
            The first successful outcome, or the last failed one. Its
            ``attempts`` field holds the number of attempts made.
        """
        attempts = 0

        async def attempt() -> DeliveryOutcome:
            nonlocal attempts
            attempts += 1
            return await work()

        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self.max_attempts),
            # multiplier * exp_base ** (n - 1) == backoff_multiplier * base ** n
            wait=wait_exponential(
                multiplier=self.backoff_multiplier * self.backoff_base,
                exp_base=self.backoff_base,
            ),
            retry=retry_if_result(_is_failure),
            before_sleep=_log_retry,
            retry_error_callback=_last_outcome,
        )
        outcome: DeliveryOutcome = await retrying(attempt)
        return outcome.model_copy(update={"attempts": attempts})
