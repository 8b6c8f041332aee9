# src/oregonchem_api/domain/interfaces/gateways/logo_provider.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Logo Provider Protocol.

Synopsis:
    Resolve the company logo as raw image bytes for the PDF header and for
    inline mail attachments.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class LogoAsset:
    """Resolved logo image.

    Attributes:
        content: Raw image bytes.
        mime_type: Image MIME type (e.g. ``image/png``).
        origin: Where the bytes came from (``local``, ``remote`` or ``bundled``).
    """

    content: bytes
    mime_type: str
    origin: str

    @property
    def content_id(self) -> str:
        """Content-addressed identifier used for inline (``cid:``) references."""
        digest = hashlib.sha256(self.content).hexdigest()[:16]
        return f"logo-{digest}@oregonchem"

    @property
    def filename(self) -> str:
        """File name for the inline attachment."""
        subtype = self.mime_type.partition("/")[2] or "png"
        return f"logo.{subtype}"


class LogoProvider(Protocol):
    """Return the first logo that resolves, or ``None`` when none does."""

    async def resolve(self) -> LogoAsset | None:
        """Resolve the logo. Never raises."""
        ...
