"""Client-side rate-limit gates.

The gateway talks to ``AbstractRateLimitGate`` so the header-driven gate can
be swapped for a test double or a different policy without touching it.
"""

from pfp.adapters.rate_limit.base import AbstractRateLimitGate, RateLimitSnapshot
from pfp.adapters.rate_limit.header_gate import HeaderRateLimitGate

__all__ = [
    "AbstractRateLimitGate",
    "HeaderRateLimitGate",
    "RateLimitSnapshot",
]
