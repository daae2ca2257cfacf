"""Turn caller-supplied image sources into upload-ready bytes."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import httpx

from pfp.core.errors import InvalidImageError

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, os.PathLike]

_CHUNK_SIZE = 8192


async def resolve_image_source(
    source: ImageSource,
    http_client: httpx.AsyncClient,
    *,
    max_bytes: int,
) -> bytes:
    """Return the raw bytes behind an image source.

    ``bytes``/``bytearray`` are used as-is, ``str`` is treated as a URL and
    downloaded, and path-like objects are read from disk.

    Args:
        source: Image bytes, an image URL, or a local file path.
        http_client: Client used to download URL sources.
        max_bytes: Largest accepted payload.

    Returns:
        Non-empty image bytes.

    Raises:
        InvalidImageError: If the source cannot be read, is empty, or is too large.
    """
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        source_type = "bytes"
    elif isinstance(source, str):
        data = await _download(source, http_client, max_bytes=max_bytes)
        source_type = "url"
    elif isinstance(source, os.PathLike):
        data = _read_file(Path(source), max_bytes=max_bytes)
        source_type = "path"
    else:
        raise InvalidImageError(
            code="invalid_image",
            message=f"Unsupported image source type: {type(source).__name__}",
            details={"source_type": type(source).__name__},
        )

    if not data:
        logger.warning("image_source.empty", extra={"source_type": source_type})
        raise InvalidImageError(
            code="invalid_image",
            message="Image source returned no data",
            details={"source_type": source_type},
        )

    _enforce_limit(len(data), max_bytes, source_type)
    return data


async def _download(url: str, http_client: httpx.AsyncClient, *, max_bytes: int) -> bytes:
    """Download a URL in chunks enforcing the max size limit."""
    size = 0
    chunks: list[bytes] = []

    try:
        async with http_client.stream("GET", url, follow_redirects=True) as response:
            if not response.is_success:
                logger.warning(
                    "image_source.fetch_failed",
                    extra={"url": url, "status": response.status_code},
                )
                raise InvalidImageError(
                    code="invalid_image",
                    message=f"Could not fetch image: {response.status_code} {response.reason_phrase}",
                    details={
                        "url": url,
                        "source_type": "url",
                        "http_status": response.status_code,
                    },
                )

            async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                size += len(chunk)
                _enforce_limit(size, max_bytes, "url")
                chunks.append(chunk)
    except httpx.HTTPError as exc:
        logger.warning(
            "image_source.fetch_failed",
            extra={"url": url, "error_type": type(exc).__name__},
        )
        raise InvalidImageError(
            code="invalid_image",
            message=f"Could not fetch image: {exc}",
            details={"url": url, "source_type": "url"},
        ) from exc

    return b"".join(chunks)


def _read_file(path: Path, *, max_bytes: int) -> bytes:
    try:
        size = path.stat().st_size
        _enforce_limit(size, max_bytes, "path")
        return path.read_bytes()
    except OSError as exc:
        logger.warning(
            "image_source.read_failed",
            extra={"path": str(path), "error_type": type(exc).__name__},
        )
        raise InvalidImageError(
            code="invalid_image",
            message=f"Could not read image file: {path}",
            details={"source_type": "path"},
        ) from exc


def _enforce_limit(size: int, max_bytes: int, source_type: str) -> None:
    if size > max_bytes:
        logger.warning(
            "image_source.too_large",
            extra={"size": size, "max_bytes": max_bytes, "source_type": source_type},
        )
        raise InvalidImageError(
            code="invalid_image",
            message=f"Image too large. Maximum size: {max_bytes} bytes",
            details={"size": size, "max_bytes": max_bytes, "source_type": source_type},
        )
