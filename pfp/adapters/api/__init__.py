"""API adapter layer - the gateway to the pride-flag image service."""

from pfp.adapters.api.base import AbstractPfPClient
from pfp.adapters.api.factory import create_pfp_client
from pfp.adapters.api.httpx_client import PfPClient

__all__ = [
    "AbstractPfPClient",
    "PfPClient",
    "create_pfp_client",
]
