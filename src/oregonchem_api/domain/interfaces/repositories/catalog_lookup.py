# src/oregonchem_api/domain/interfaces/repositories/catalog_lookup.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Catalog lookup interface.

Purpose:
    Read-only resolution of catalog identifiers into display strings, used to
    enrich quote line items at submission time.

Layer:
    domain/interfaces/repositories
"""

from __future__ import annotations

from typing import Protocol


class CatalogLookup(Protocol):
    """Resolve product and presentation identifiers.

    Implementations must be safe to call concurrently: the quote pipeline
    fires every line-item lookup at once and awaits them together.

    Both methods return ``None`` for unknown or malformed identifiers and
    raise :class:`~oregonchem_api.domain.exceptions.quotes.CatalogLookupError`
    when the underlying store fails.
    """

    async def get_product_name(self, product_id: str) -> str | None:
        """Return the display name of a product."""
        ...

    async def get_presentation_label(self, presentation_id: str) -> str | None:
        """Return the display label of a presentation (e.g. "20 kg")."""
        ...
