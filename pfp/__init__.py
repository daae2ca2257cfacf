"""Async client for the pfp.lgbt pride-flag image API."""

from pfp.adapters.api import AbstractPfPClient, PfPClient, create_pfp_client
from pfp.core.errors import (
    BodyDecodeError,
    HttpStatusError,
    InvalidImageError,
    PfPError,
    RateLimitedError,
    TransportError,
)
from pfp.schemas.flags import FLAG_IDS, FlagDescriptor, FlagId

__version__ = "0.1.0"

__all__ = [
    "AbstractPfPClient",
    "BodyDecodeError",
    "FLAG_IDS",
    "FlagDescriptor",
    "FlagId",
    "HttpStatusError",
    "InvalidImageError",
    "PfPClient",
    "PfPError",
    "RateLimitedError",
    "TransportError",
    "create_pfp_client",
]
