"""Rate-limit gate interfaces.

The gateway depends on this abstraction rather than on the header-driven
implementation, so tests and alternative policies can plug in their own gate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol


class Cancellable(Protocol):
    """Handle returned by a scheduler; ``asyncio.TimerHandle`` satisfies it."""

    def cancel(self) -> None: ...


# (delay_seconds, callback) -> handle
Scheduler = Callable[[float, Callable[[], None]], Cancellable]


@dataclass
class RateLimitState:
    """Mutable gate state owned by exactly one gate instance.

    Attributes:
        rate_limited: True while the server-declared window is open.
        rate_limit_end_ms: Epoch milliseconds at which the window ends.
        reset_handle: Pending timer that reopens the gate, if any.
    """

    rate_limited: bool = False
    rate_limit_end_ms: int = 0
    reset_handle: Cancellable | None = None


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Read-only view of the gate for callers and logs."""

    rate_limited: bool
    rate_limit_end_ms: int
    reset_pending: bool


class AbstractRateLimitGate(ABC):
    """Interface for client-side rate-limit gates."""

    @abstractmethod
    def ensure_open(self) -> None:
        """Raise ``RateLimitedError`` if requests must not be sent right now."""
        raise NotImplementedError

    @abstractmethod
    def observe(self, headers: Mapping[str, str]) -> None:
        """Update the gate from the headers of a received response.

        Args:
            headers: Case-insensitive response headers.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> RateLimitSnapshot:
        raise NotImplementedError

    @abstractmethod
    def cancel_pending_reset(self) -> None:
        """Drop any scheduled reset without changing the current state."""
        raise NotImplementedError
