from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oregonchem_api.adapters.repositories.catalog_repository import SqlAlchemyCatalogLookup
from oregonchem_api.infrastructure.database.models.catalog import (
    CatalogPresentation,
    CatalogProduct,
)


@pytest.fixture
async def seeded(
    session_factory: async_sessionmaker[AsyncSession],
) -> dict[str, str]:
    product = CatalogProduct(id=uuid4(), title="Soda Cáustica", slug="soda-caustica", status="published")
    pretty = CatalogPresentation(id=uuid4(), qty=25, unit="kg", pretty="Bolsa 25 kg")
    derived = CatalogPresentation(id=uuid4(), qty=1.5, unit="L")
    async with session_factory() as session:
        session.add_all([product, pretty, derived])
        await session.commit()
    return {"product": str(product.id), "pretty": str(pretty.id), "derived": str(derived.id)}


@pytest.mark.asyncio
async def test_product_title_by_id(
    session_factory: async_sessionmaker[AsyncSession], seeded: dict[str, str]
) -> None:
    lookup = SqlAlchemyCatalogLookup(session_factory)

    assert await lookup.get_product_name(seeded["product"]) == "Soda Cáustica"
    assert await lookup.get_product_name(str(uuid4())) is None


@pytest.mark.asyncio
async def test_presentation_labels(
    session_factory: async_sessionmaker[AsyncSession], seeded: dict[str, str]
) -> None:
    lookup = SqlAlchemyCatalogLookup(session_factory)

    assert await lookup.get_presentation_label(seeded["pretty"]) == "Bolsa 25 kg"
    assert await lookup.get_presentation_label(seeded["derived"]) == "1.5 L"
    assert await lookup.get_presentation_label(str(uuid4())) is None


@pytest.mark.asyncio
async def test_malformed_ids_resolve_to_none(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    lookup = SqlAlchemyCatalogLookup(session_factory)

    assert await lookup.get_product_name("prod-1") is None
    assert await lookup.get_presentation_label("") is None


def test_label_drops_trailing_zero() -> None:
    assert CatalogPresentation(qty=20.0, unit="kg").label == "20 kg"
