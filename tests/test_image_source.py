"""Unit tests for image source resolution."""

from pathlib import Path

import httpx
import pytest
import respx

from pfp.core.errors import InvalidImageError
from pfp.utils.image_source import resolve_image_source

URL = "https://images.example.com/cat.jpg"
MAX_BYTES = 1024


@pytest.mark.asyncio
async def test_bytes_are_returned_unchanged() -> None:
    async with httpx.AsyncClient() as http:
        assert await resolve_image_source(b"abc", http, max_bytes=MAX_BYTES) == b"abc"
        assert await resolve_image_source(bytearray(b"xyz"), http, max_bytes=MAX_BYTES) == b"xyz"


@pytest.mark.asyncio
async def test_empty_bytes_are_rejected() -> None:
    async with httpx.AsyncClient() as http:
        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(b"", http, max_bytes=MAX_BYTES)

    assert exc.value.code == "invalid_image"
    assert exc.value.details["source_type"] == "bytes"


@pytest.mark.asyncio
async def test_oversized_bytes_are_rejected() -> None:
    async with httpx.AsyncClient() as http:
        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(b"x" * (MAX_BYTES + 1), http, max_bytes=MAX_BYTES)

    assert exc.value.details["size"] == MAX_BYTES + 1


@pytest.mark.asyncio
async def test_url_is_downloaded() -> None:
    async with respx.mock() as mock, httpx.AsyncClient() as http:
        mock.get(URL).mock(return_value=httpx.Response(200, content=b"jpeg-bytes"))

        assert await resolve_image_source(URL, http, max_bytes=MAX_BYTES) == b"jpeg-bytes"


@pytest.mark.asyncio
async def test_url_error_status_is_rejected() -> None:
    async with respx.mock() as mock, httpx.AsyncClient() as http:
        mock.get(URL).mock(return_value=httpx.Response(500))

        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(URL, http, max_bytes=MAX_BYTES)

    assert exc.value.details["http_status"] == 500


@pytest.mark.asyncio
async def test_url_connection_error_is_rejected() -> None:
    async with respx.mock() as mock, httpx.AsyncClient() as http:
        mock.get(URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(URL, http, max_bytes=MAX_BYTES)

    assert isinstance(exc.value.__cause__, httpx.ConnectTimeout)


@pytest.mark.asyncio
async def test_url_download_stops_past_limit() -> None:
    async with respx.mock() as mock, httpx.AsyncClient() as http:
        mock.get(URL).mock(return_value=httpx.Response(200, content=b"x" * (MAX_BYTES * 3)))

        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(URL, http, max_bytes=MAX_BYTES)

    assert exc.value.details["source_type"] == "url"


@pytest.mark.asyncio
async def test_path_is_read(tmp_path: Path) -> None:
    image_path = tmp_path / "avatar.png"
    image_path.write_bytes(b"png-bytes")

    async with httpx.AsyncClient() as http:
        assert await resolve_image_source(image_path, http, max_bytes=MAX_BYTES) == b"png-bytes"


@pytest.mark.asyncio
async def test_missing_path_is_rejected(tmp_path: Path) -> None:
    async with httpx.AsyncClient() as http:
        with pytest.raises(InvalidImageError) as exc:
            await resolve_image_source(tmp_path / "missing.png", http, max_bytes=MAX_BYTES)

    assert exc.value.details["source_type"] == "path"


@pytest.mark.asyncio
async def test_unsupported_type_is_rejected() -> None:
    async with httpx.AsyncClient() as http:
        with pytest.raises(InvalidImageError, match="Unsupported image source type"):
            await resolve_image_source(42, http, max_bytes=MAX_BYTES)  # type: ignore[arg-type]
