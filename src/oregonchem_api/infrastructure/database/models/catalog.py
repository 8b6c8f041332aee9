# src/oregonchem_api/infrastructure/database/models/catalog.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Catalog Models.

Purpose:
    Read-side view of the product catalog consulted while enriching quote
    line items. Catalog maintenance happens elsewhere; this service only
    reads these tables.

Layer:
    infrastructure
"""

from __future__ import annotations

from sqlalchemy import JSON, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from oregonchem_api.infrastructure.database.models.base import (
    Base,
    IdentityMixin,
    TimestampMixin,
)


class CatalogProduct(IdentityMixin, TimestampMixin, Base):
    """Catalog product.

    Attributes:
        title: Display name used on quotes.
        slug: URL slug (unique).
        status: ``draft`` or ``published``.
        presentation_ids: JSON list of presentation ids offered for the product.
    """

    __tablename__ = "catalog_products"

    title: Mapped[str] = mapped_column(String(length=255), nullable=False)
    slug: Mapped[str] = mapped_column(String(length=255), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(
        String(length=16),
        nullable=False,
        default="draft",
        server_default="draft",
    )
    presentation_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)


class CatalogPresentation(IdentityMixin, TimestampMixin, Base):
    """Canonical presentation (package size) such as ``20 kg``.

    Attributes:
        qty: Numeric quantity.
        unit: Unit symbol.
        pretty: Human label; derived from ``qty`` and ``unit`` when empty.
    """

    __tablename__ = "catalog_presentations"

    qty: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(length=16), nullable=False)
    pretty: Mapped[str | None] = mapped_column(String(length=64), nullable=True)

    @property
    def label(self) -> str:
        """Return ``pretty`` or a ``"<qty> <unit>"`` rendering."""
        if self.pretty:
            return self.pretty
        qty = int(self.qty) if float(self.qty).is_integer() else self.qty
        return f"{qty} {self.unit}"
