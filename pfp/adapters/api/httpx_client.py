"""httpx-based gateway for the pride-flag image API."""

from __future__ import annotations

import logging
import time
from typing import Any, Literal, overload

import httpx
from pydantic import ValidationError

from pfp.adapters.api.base import AbstractPfPClient
from pfp.adapters.rate_limit.base import AbstractRateLimitGate
from pfp.adapters.rate_limit.header_gate import HeaderRateLimitGate
from pfp.core.config import DEFAULT_BASE_URL
from pfp.core.errors import BodyDecodeError, HttpStatusError, TransportError
from pfp.core.logging import clear_call_id, new_call_id, set_call_id
from pfp.schemas.effects import (
    AnimatedEffectRequest,
    AnimatedEffectType,
    EffectStyle,
    OutputFormat,
    StaticEffectRequest,
    StaticEffectType,
)
from pfp.schemas.flags import FlagDescriptor, FlagId, FlagResponse
from pfp.utils.image_source import ImageSource, resolve_image_source

logger = logging.getLogger(__name__)

ContentKind = Literal["json", "binary"]


class PfPClient(AbstractPfPClient):
    """Async gateway to the pride-flag image API.

    Every call goes through one pipeline: check the rate-limit gate, send the
    request, feed the response headers to the gate, reject non-2xx statuses,
    then decode the body as the content kind chosen by the caller.

    Usage:
        async with PfPClient() as client:
            flags = await client.get_flags()
            png = await client.create_static_effect(image_bytes, "trans")
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: AbstractRateLimitGate | None = None,
        timeout_seconds: float | None = None,
        default_reset_ms: int = 5000,
        max_image_bytes: int = 10 * 1024 * 1024,
        user_agent: str | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: API root; a trailing slash is added when missing.
            http_client: Shared httpx client. When omitted the gateway creates
                and owns one, and closes it in ``aclose()``.
            rate_limiter: Gate consulted before and updated after each call.
            timeout_seconds: Timeout for an owned client; None disables it.
            default_reset_ms: Window assumed when the reset header is absent.
            max_image_bytes: Largest image source accepted for upload.
            user_agent: User-Agent header for an owned client.
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.max_image_bytes = max_image_bytes

        self._owns_http_client = http_client is None
        if http_client is None:
            headers = {"User-Agent": user_agent} if user_agent else None
            http_client = httpx.AsyncClient(timeout=timeout_seconds, headers=headers)
        self._http = http_client
        self._gate = rate_limiter or HeaderRateLimitGate(default_reset_ms=default_reset_ms)

    @property
    def rate_limited(self) -> bool:
        return self._gate.snapshot().rate_limited

    @property
    def rate_limit_end_ms(self) -> int:
        return self._gate.snapshot().rate_limit_end_ms

    async def aclose(self) -> None:
        self._gate.cancel_pending_reset()
        if self._owns_http_client:
            await self._http.aclose()

    async def get_flags(self) -> FlagResponse:
        return await self._fetch("GET", "flags", "json")

    async def get_flag_descriptors(self) -> dict[str, FlagDescriptor]:
        raw = await self.get_flags()
        if not isinstance(raw, dict):
            raise BodyDecodeError(
                code="body_decode_failed",
                message="Flag metadata is not a JSON object",
                details={"content_kind": "json"},
            )
        try:
            return {
                key: FlagDescriptor.model_validate({**value, "key": key})
                for key, value in raw.items()
            }
        except (TypeError, ValidationError) as exc:
            raise BodyDecodeError(
                code="body_decode_failed",
                message=f"Flag metadata has an unexpected shape: {exc}",
                details={"content_kind": "json"},
            ) from exc

    async def get_flag_icon(self, flag: FlagId | str = "pride") -> bytes:
        return await self._fetch("GET", f"icon/{flag}", "binary")

    async def create_static_effect(
        self,
        image: ImageSource,
        flag: FlagId | str,
        effect_type: StaticEffectType | str = "circle",
        effect_style: EffectStyle | str = "solid",
        output_format: OutputFormat | str = "png",
        alpha: float | None = None,
    ) -> bytes:
        request = StaticEffectRequest(
            image=await self._prepare_image(image),
            flag=flag,
            effect_type=effect_type,
            effect_style=effect_style,
            output_format=output_format,
            alpha=alpha,
        )
        return await self._post_effect(request)

    async def create_animated_effect(
        self,
        image: ImageSource,
        flag: FlagId | str,
        effect_type: AnimatedEffectType | str = "circle",
        alpha: float | None = None,
    ) -> bytes:
        request = AnimatedEffectRequest(
            image=await self._prepare_image(image),
            flag=flag,
            effect_type=effect_type,
            alpha=alpha,
        )
        return await self._post_effect(request)

    async def _prepare_image(self, image: ImageSource) -> bytes:
        # Gate first so a closed window never triggers the source download.
        self._gate.ensure_open()
        return await resolve_image_source(image, self._http, max_bytes=self.max_image_bytes)

    async def _post_effect(self, request: StaticEffectRequest | AnimatedEffectRequest) -> bytes:
        return await self._fetch(
            "POST",
            request.endpoint_path,
            "binary",
            files=request.files(),
            data=request.form_fields(),
        )

    @overload
    async def _fetch(
        self, method: str, path: str, kind: Literal["json"], **kwargs: Any
    ) -> Any: ...

    @overload
    async def _fetch(
        self, method: str, path: str, kind: Literal["binary"], **kwargs: Any
    ) -> bytes: ...

    async def _fetch(self, method: str, path: str, kind: ContentKind, **kwargs: Any) -> Any:
        """Run one request through the gate/dispatch/decode pipeline.

        Args:
            method: HTTP method.
            path: Endpoint path relative to ``base_url``.
            kind: How to decode a successful body: ``json`` or ``binary``.
            **kwargs: Passed to ``httpx.AsyncClient.request`` (files, data).

        Raises:
            RateLimitedError: The gate is closed; nothing was sent.
            TransportError: The request failed before a response arrived.
            HttpStatusError: The status is outside 200-299.
            BodyDecodeError: A JSON body could not be decoded.
        """
        self._gate.ensure_open()

        url = self.base_url + path
        set_call_id(new_call_id())
        start = time.perf_counter()
        try:
            try:
                response = await self._http.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                logger.error(
                    "request.transport_failed",
                    extra={"method": method, "path": path, "error_type": type(exc).__name__},
                )
                raise TransportError(
                    code="transport_failed",
                    message=f"{method} {path} failed: {exc}",
                    details={"url": url},
                ) from exc

            # Runs for every response, successful or not.
            self._gate.observe(response.headers)

            logger.debug(
                "request.completed",
                extra={
                    "method": method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )

            if not 200 <= response.status_code <= 299:
                logger.warning(
                    "request.http_error",
                    extra={"method": method, "path": path, "status": response.status_code},
                )
                raise HttpStatusError.from_status(
                    response.status_code, response.reason_phrase, url
                )

            return self._decode(response, kind)
        finally:
            clear_call_id()

    @staticmethod
    def _decode(response: httpx.Response, kind: ContentKind) -> Any:
        if kind == "binary":
            return response.content
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "request.body_decode_failed",
                extra={"content_kind": kind, "status": response.status_code},
            )
            raise BodyDecodeError(
                code="body_decode_failed",
                message=f"Response body is not valid JSON: {exc}",
                details={"content_kind": kind},
            ) from exc
