# src/oregonchem_api/adapters/gateways/logo_provider.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Chained company-logo provider.

Sources are tried in order: configured local file, remote URL (httpx) and
the logo bundled with the package. The first one that yields image bytes
wins. Failures are logged and skipped; ``resolve`` never raises.

An instance resolves once and then returns the same result. The dependency
layer builds one provider per request, so the PDF and both mails of a
submission share a single lookup.
"""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path

import httpx

from oregonchem_api.domain.interfaces.gateways.logo_provider import LogoAsset
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF8", "image/gif"),
)


def sniff_image_type(content: bytes, hint: str | None = None) -> str | None:
    """Return the image MIME type for ``content``, or ``None`` if it is not an image."""
    for magic, mime in _SIGNATURES:
        if content.startswith(magic):
            return mime
    if hint and hint.startswith("image/"):
        return hint
    return None


class ChainedLogoProvider:
    """Resolve the logo from local path, remote URL, then bundled fallback.

    Args:
        local_path: Optional file configured by the operator.
        remote_url: Optional URL fetched with ``http_client``.
        fallback_path: Logo shipped with the package.
        http_client: Shared async client; a short-lived one is opened per
            fetch when omitted.
        timeout_s: Remote fetch timeout.
    """

    def __init__(
        self,
        *,
        local_path: str | None = None,
        remote_url: str | None = None,
        fallback_path: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
    ) -> None:
        self._local_path = local_path
        self._remote_url = remote_url
        self._fallback_path = fallback_path
        self._http = http_client
        self._timeout_s = timeout_s
        self._lock = asyncio.Lock()
        self._resolved = False
        self._asset: LogoAsset | None = None

    async def resolve(self) -> LogoAsset | None:
        async with self._lock:
            if not self._resolved:
                self._asset = await self._lookup()
                self._resolved = True
        return self._asset

    async def _lookup(self) -> LogoAsset | None:
        if self._local_path:
            asset = await self._read_file(self._local_path, origin="local")
            if asset is not None:
                return asset
        if self._remote_url:
            asset = await self._fetch(self._remote_url)
            if asset is not None:
                return asset
        if self._fallback_path:
            asset = await self._read_file(self._fallback_path, origin="bundled")
            if asset is not None:
                return asset
        logger.warning("logo_unresolved", extra={"extra": {}})
        return None

    async def _read_file(self, path: str, *, origin: str) -> LogoAsset | None:
        try:
            content = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as exc:
            logger.warning(
                "logo_file_unreadable",
                extra={"extra": {"origin": origin, "path": path, "error": str(exc)}},
            )
            return None
        mime = sniff_image_type(content, mimetypes.guess_type(path)[0])
        if mime is None:
            logger.warning(
                "logo_file_not_image",
                extra={"extra": {"origin": origin, "path": path}},
            )
            return None
        return LogoAsset(content=content, mime_type=mime, origin=origin)

    async def _fetch(self, url: str) -> LogoAsset | None:
        try:
            if self._http is not None:
                resp = await self._http.get(url, timeout=self._timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                    resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("logo_fetch_failed", extra={"extra": {"url": url, "error": str(exc)}})
            return None

        hint = resp.headers.get("content-type", "").split(";")[0].strip().lower()
        mime = sniff_image_type(resp.content, hint)
        if mime is None:
            logger.warning(
                "logo_fetch_not_image",
                extra={"extra": {"url": url, "content_type": hint}},
            )
            return None
        return LogoAsset(content=resp.content, mime_type=mime, origin="remote")
