"""Factory for building gateway instances from settings."""

import httpx

from pfp.adapters.api.base import AbstractPfPClient
from pfp.adapters.api.httpx_client import PfPClient
from pfp.core.config import ClientSettings, settings
from pfp.core.errors import PfPError


def create_pfp_client(
    client_settings: ClientSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AbstractPfPClient:
    """Instantiate the gateway from ``pfp.core.config.settings``.

    Args:
        client_settings: Overrides the global client settings when given.
        http_client: Optional shared httpx client (not closed by the gateway).

    Returns:
        AbstractPfPClient: Configured gateway.

    Raises:
        PfPError: If the configured base URL is not an http(s) URL.
    """
    cfg = client_settings or settings.client

    if not cfg.base_url.startswith(("http://", "https://")):
        raise PfPError(
            code="invalid_base_url",
            message=f"PFP_BASE_URL must be an http(s) URL, got '{cfg.base_url}'",
        )

    return PfPClient(
        base_url=cfg.base_url,
        http_client=http_client,
        timeout_seconds=cfg.timeout_seconds,
        default_reset_ms=cfg.default_reset_ms,
        max_image_bytes=cfg.max_image_bytes,
        user_agent=cfg.user_agent,
    )
