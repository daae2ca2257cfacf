"""Client-level exception types.

Every failure surfaced by the gateway derives from ``PfPError`` so callers can
catch one type, while ``code`` stays stable for programmatic handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context attached to client errors."""

    http_status: int
    status_text: str
    retry_after: float
    reset_at_ms: int
    url: str
    source_type: str
    size: int
    max_bytes: int
    content_kind: str
    context: NotRequired[dict[str, Any]]


@dataclass
class PfPError(Exception):
    """Base error for all gateway failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class RateLimitedError(PfPError):
    """Raised when the local rate-limit gate is closed. No request was sent."""


class HttpStatusError(PfPError):
    """Raised when the remote API answers outside the 2xx range."""

    @classmethod
    def from_status(cls, status: int, status_text: str, url: str) -> HttpStatusError:
        return cls(
            code="http_status",
            message=f"{status}: {status_text}",
            details={"http_status": status, "status_text": status_text, "url": url},
        )

    @property
    def status(self) -> int:
        return (self.details or {}).get("http_status", 0)

    @property
    def status_text(self) -> str:
        return (self.details or {}).get("status_text", "")


class BodyDecodeError(PfPError):
    """Raised when a response body cannot be parsed as expected."""


class InvalidImageError(PfPError):
    """Raised when an image source cannot be turned into usable bytes."""


class TransportError(PfPError):
    """Raised when the HTTP transport fails before a response arrives."""
