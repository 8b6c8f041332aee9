# src/oregonchem_api/adapters/repositories/catalog_repository.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
SQLAlchemy Catalog Lookup

Purpose:
    Resolve product names and presentation labels for quote enrichment.

Notes:
    Each lookup opens its own short-lived session so the pipeline can fire
    all lookups for a quote concurrently; an ``AsyncSession`` does not allow
    concurrent operations. Identifiers that are not UUIDs cannot exist in the
    catalog and resolve to ``None`` without a query.

Layer: adapters / repositories
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oregonchem_api.domain.exceptions.quotes import CatalogLookupError
from oregonchem_api.infrastructure.database.models.catalog import (
    CatalogPresentation,
    CatalogProduct,
)


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None


class SqlAlchemyCatalogLookup:
    """Catalog lookup backed by the ``catalog_*`` tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_product_name(self, product_id: str) -> str | None:
        pid = _parse_id(product_id)
        if pid is None:
            return None
        try:
            async with self._session_factory() as session:
                return await session.scalar(
                    select(CatalogProduct.title).where(CatalogProduct.id == pid)
                )
        except SQLAlchemyError as exc:
            raise CatalogLookupError(
                "Catalog product lookup failed",
                details={"product_id": product_id},
            ) from exc

    async def get_presentation_label(self, presentation_id: str) -> str | None:
        pid = _parse_id(presentation_id)
        if pid is None:
            return None
        try:
            async with self._session_factory() as session:
                row = await session.get(CatalogPresentation, pid)
        except SQLAlchemyError as exc:
            raise CatalogLookupError(
                "Catalog presentation lookup failed",
                details={"presentation_id": presentation_id},
            ) from exc
        return row.label if row is not None else None
