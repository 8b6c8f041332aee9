# src/oregonchem_api/adapters/repositories/quote_repository.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
SQLAlchemy Quote Repository

Purpose:
    Persist and query :class:`Quote` entities over the ``quotes`` table.
    Line items and contact preferences round-trip through JSON columns.

Layer: adapters / repositories
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select

from oregonchem_api.adapters.repositories.base_repository import BaseRepository
from oregonchem_api.domain.entities.quote import ContactPreferences, Quote, QuoteLineItem
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus
from oregonchem_api.infrastructure.database.models.quotes import QuoteRecord


def _item_to_json(item: QuoteLineItem) -> dict[str, Any]:
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "presentation_id": item.presentation_id,
        "presentation_label": item.presentation_label,
        "quantity": item.quantity,
        "frequency": item.frequency.value,
    }


def _item_from_json(raw: dict[str, Any]) -> QuoteLineItem:
    return QuoteLineItem(
        product_id=str(raw["product_id"]),
        product_name=str(raw.get("product_name") or ""),
        quantity=int(raw["quantity"]),
        frequency=PurchaseFrequency(raw["frequency"]),
        presentation_id=raw.get("presentation_id"),
        presentation_label=raw.get("presentation_label"),
    )


def to_record(quote: Quote) -> QuoteRecord:
    """Map a domain quote onto a new ORM row."""
    prefs = quote.contact_preferences
    return QuoteRecord(
        id=quote.id,
        client_type=quote.client_type.value,
        first_name=quote.first_name,
        last_name=quote.last_name,
        dni=quote.dni,
        phone=quote.phone,
        email=quote.email,
        company_name=quote.company_name,
        ruc=quote.ruc,
        products=[_item_to_json(i) for i in quote.products],
        contact_preferences={
            "email": prefs.email,
            "whatsapp": prefs.whatsapp,
            "phone": prefs.phone,
        },
        observations=quote.observations,
        status=quote.status.value,
        source=quote.source,
        ip_address=quote.ip_address,
        user_agent=quote.user_agent,
        created_at=quote.created_at,
        updated_at=quote.updated_at,
    )


def to_entity(row: QuoteRecord) -> Quote:
    """Map an ORM row back to the domain entity."""
    prefs = row.contact_preferences or {}
    return Quote(
        id=row.id,
        client_type=ClientType(row.client_type),
        first_name=row.first_name,
        last_name=row.last_name,
        dni=row.dni,
        phone=row.phone,
        email=row.email,
        company_name=row.company_name,
        ruc=row.ruc,
        products=tuple(_item_from_json(raw) for raw in row.products or ()),
        contact_preferences=ContactPreferences(
            email=bool(prefs.get("email")),
            whatsapp=bool(prefs.get("whatsapp")),
            phone=bool(prefs.get("phone")),
        ),
        observations=row.observations or "",
        status=QuoteStatus(row.status),
        source=row.source,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyQuoteRepository(BaseRepository[QuoteRecord]):
    """Quote repository over an AsyncSession. Never commits."""

    async def add(self, quote: Quote) -> Quote:
        self._session.add(to_record(quote))
        await self._session.flush()
        return quote

    async def get(self, quote_id: UUID) -> Quote | None:
        row = await self.fetch_optional(select(QuoteRecord).where(QuoteRecord.id == quote_id))
        return to_entity(row) if row is not None else None

    async def list(
        self,
        *,
        status: QuoteStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Quote], int]:
        stmt = select(QuoteRecord)
        if status is not None:
            stmt = stmt.where(QuoteRecord.status == status.value)

        total = await self.count(stmt)
        page = self.order_by_created(stmt, QuoteRecord.created_at, QuoteRecord.id)
        rows = await self.fetch_all(page.offset(offset).limit(limit))
        return [to_entity(r) for r in rows], total

    async def update_status(
        self,
        quote_id: UUID,
        status: QuoteStatus,
        *,
        updated_at: datetime,
    ) -> Quote | None:
        row = await self.fetch_optional(select(QuoteRecord).where(QuoteRecord.id == quote_id))
        if row is None:
            return None
        row.status = status.value
        row.updated_at = updated_at
        await self._session.flush()
        return to_entity(row)
