from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import respx

from oregonchem_api.adapters.gateways.logo_provider import ChainedLogoProvider, sniff_image_type

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 8
LOGO_URL = "https://cdn.quimicaindustrial.pe/logo.png"


def test_sniff_image_type() -> None:
    assert sniff_image_type(PNG) == "image/png"
    assert sniff_image_type(JPEG) == "image/jpeg"
    assert sniff_image_type(b"<svg/>", "image/svg+xml") == "image/svg+xml"
    assert sniff_image_type(b"<html>", "text/html") is None


@pytest.mark.asyncio
async def test_local_file_wins(tmp_path: Path) -> None:
    local = tmp_path / "logo.png"
    local.write_bytes(PNG)

    with respx.mock:
        route = respx.get(LOGO_URL).mock(return_value=httpx.Response(200, content=JPEG))
        asset = await ChainedLogoProvider(local_path=str(local), remote_url=LOGO_URL).resolve()
        assert not route.called

    assert asset is not None
    assert asset.origin == "local"
    assert asset.mime_type == "image/png"


@pytest.mark.asyncio
async def test_remote_used_when_local_missing(tmp_path: Path) -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(LOGO_URL).mock(
                return_value=httpx.Response(
                    200, content=JPEG, headers={"content-type": "image/jpeg"}
                )
            )
            asset = await ChainedLogoProvider(
                local_path=str(tmp_path / "missing.png"),
                remote_url=LOGO_URL,
                http_client=http,
            ).resolve()

    assert asset is not None
    assert asset.origin == "remote"
    assert asset.content == JPEG


@pytest.mark.asyncio
async def test_bundled_fallback_when_remote_is_not_an_image(tmp_path: Path) -> None:
    fallback = tmp_path / "bundled.png"
    fallback.write_bytes(PNG)

    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(LOGO_URL).mock(
                return_value=httpx.Response(
                    200, content=b"<html>oops</html>", headers={"content-type": "text/html"}
                )
            )
            asset = await ChainedLogoProvider(
                remote_url=LOGO_URL, fallback_path=str(fallback), http_client=http
            ).resolve()

    assert asset is not None
    assert asset.origin == "bundled"


@pytest.mark.asyncio
async def test_http_error_status_skipped() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(LOGO_URL).mock(return_value=httpx.Response(404))
            asset = await ChainedLogoProvider(remote_url=LOGO_URL, http_client=http).resolve()

    assert asset is None


@pytest.mark.asyncio
async def test_non_image_local_file_rejected(tmp_path: Path) -> None:
    bogus = tmp_path / "logo.txt"
    bogus.write_text("not an image")

    assert await ChainedLogoProvider(local_path=str(bogus)).resolve() is None


@pytest.mark.asyncio
async def test_remote_logo_fetched_once_per_provider() -> None:
    provider = ChainedLogoProvider(remote_url=LOGO_URL)

    with respx.mock:
        route = respx.get(LOGO_URL).mock(
            return_value=httpx.Response(200, content=PNG, headers={"content-type": "image/png"})
        )
        first = await provider.resolve()
        second = await provider.resolve()
        assert route.call_count == 1

    assert first is second
    assert first is not None and first.origin == "remote"


@pytest.mark.asyncio
async def test_unresolved_logo_is_remembered() -> None:
    provider = ChainedLogoProvider(remote_url=LOGO_URL)

    with respx.mock:
        route = respx.get(LOGO_URL).mock(return_value=httpx.Response(503))
        assert await provider.resolve() is None
        assert await provider.resolve() is None
        assert route.call_count == 1
