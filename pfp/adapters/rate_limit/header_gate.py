"""Rate-limit gate driven by ``x-ratelimit-*`` response headers.

Notes:
- Per-client only: two clients in one process track their windows separately.
- No lock: header handling never awaits, so on one event loop each response
  is applied atomically. When two responses report an exhausted window, the
  later one replaces both the end instant and the pending reset.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Mapping

from pfp.adapters.rate_limit.base import (
    AbstractRateLimitGate,
    Cancellable,
    RateLimitSnapshot,
    RateLimitState,
    Scheduler,
)
from pfp.core.errors import RateLimitedError

logger = logging.getLogger(__name__)

REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"


def _now_ms() -> int:
    return int(time.time() * 1000)


def loop_scheduler(delay_seconds: float, callback: Callable[[], None]) -> Cancellable:
    """Schedule ``callback`` on the running event loop."""
    return asyncio.get_running_loop().call_later(delay_seconds, callback)


class HeaderRateLimitGate(AbstractRateLimitGate):
    """Closes when the API reports zero remaining requests, reopens on a timer.

    The gate has two states. It starts open. A response carrying
    ``x-ratelimit-remaining: 0`` closes it, whatever the HTTP status was, and
    schedules a reset for the instant given by ``x-ratelimit-reset`` (epoch
    seconds) or ``default_reset_ms`` from now when that header is missing.
    Only the scheduled callback reopens the gate.
    """

    def __init__(
        self,
        *,
        default_reset_ms: int = 5000,
        clock_ms: Callable[[], int] = _now_ms,
        scheduler: Scheduler = loop_scheduler,
    ) -> None:
        """Initialize the gate.

        Args:
            default_reset_ms: Window length assumed when no reset header is sent.
            clock_ms: Time source returning UNIX time in milliseconds.
            scheduler: Callable scheduling the reset callback after a delay.

        Raises:
            ValueError: If default_reset_ms is negative.
        """
        if default_reset_ms < 0:
            raise ValueError("default_reset_ms must be >= 0")

        self._default_reset_ms = default_reset_ms
        self._clock_ms = clock_ms
        self._scheduler = scheduler
        self._state = RateLimitState()

    @property
    def rate_limited(self) -> bool:
        return self._state.rate_limited

    @property
    def rate_limit_end_ms(self) -> int:
        return self._state.rate_limit_end_ms

    def snapshot(self) -> RateLimitSnapshot:
        return RateLimitSnapshot(
            rate_limited=self._state.rate_limited,
            rate_limit_end_ms=self._state.rate_limit_end_ms,
            reset_pending=self._state.reset_handle is not None,
        )

    def ensure_open(self) -> None:
        if not self._state.rate_limited:
            return

        retry_after = max(0.0, (self._state.rate_limit_end_ms - self._clock_ms()) / 1000)
        logger.warning(
            "rate_limit.rejected",
            extra={
                "reset_at_ms": self._state.rate_limit_end_ms,
                "retry_after_s": retry_after,
            },
        )
        raise RateLimitedError(
            code="rate_limited",
            message="Rate limit reached!",
            details={
                "retry_after": retry_after,
                "reset_at_ms": self._state.rate_limit_end_ms,
            },
        )

    def observe(self, headers: Mapping[str, str]) -> None:
        if headers.get(REMAINING_HEADER) != "0":
            return

        now = self._clock_ms()
        reset_at_ms = self._resolve_reset_ms(headers.get(RESET_HEADER), now)

        self._state.rate_limited = True
        self._state.rate_limit_end_ms = reset_at_ms

        self.cancel_pending_reset()
        delay_s = max(0, reset_at_ms - now) / 1000
        self._state.reset_handle = self._scheduler(delay_s, self._reopen)

        logger.info(
            "rate_limit.closed",
            extra={"reset_at_ms": reset_at_ms, "delay_s": delay_s},
        )

    def cancel_pending_reset(self) -> None:
        handle = self._state.reset_handle
        if handle is not None:
            handle.cancel()
            self._state.reset_handle = None

    def _resolve_reset_ms(self, raw_reset: str | None, now: int) -> int:
        """Turn the reset header into epoch milliseconds.

        An absent or empty header falls back to ``now + default_reset_ms``;
        so does a value that is not a finite number.
        """
        if raw_reset:
            try:
                return int(float(raw_reset)) * 1000
            except (ValueError, OverflowError):
                logger.warning(
                    "rate_limit.invalid_reset_header",
                    extra={"header_value": raw_reset[:32]},
                )
        return now + self._default_reset_ms

    def _reopen(self) -> None:
        self._state.rate_limited = False
        self._state.reset_handle = None
        logger.info("rate_limit.reset", extra={"reset_at_ms": self._state.rate_limit_end_ms})
