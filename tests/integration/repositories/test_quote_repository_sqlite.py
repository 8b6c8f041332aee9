from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from fakes import build_quote
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oregonchem_api.adapters.repositories.quote_repository import SqlAlchemyQuoteRepository
from oregonchem_api.adapters.uow.sqlalchemy_uow import SqlAlchemyUnitOfWork
from oregonchem_api.domain.enums.quotes import QuoteStatus
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository

BASE = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_add_then_get_round_trips_line_items(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    quote = build_quote(company_name="ACME SAC", observations="Línea 1\nLínea 2")

    async with session_factory() as session:
        await SqlAlchemyQuoteRepository(session=session).add(quote)
        await session.commit()

    async with session_factory() as session:
        stored = await SqlAlchemyQuoteRepository(session=session).get(quote.id)

    assert stored is not None
    assert stored.company_name == "ACME SAC"
    assert stored.observations == "Línea 1\nLínea 2"
    assert stored.status is QuoteStatus.PENDING
    assert stored.products == quote.products
    assert stored.contact_preferences == quote.contact_preferences
    assert stored.created_at == quote.created_at


@pytest.mark.asyncio
async def test_list_newest_first_with_filter_and_total(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    quotes = [
        build_quote(created_at=BASE + timedelta(minutes=i), updated_at=BASE + timedelta(minutes=i))
        for i in range(5)
    ]
    quotes[1] = quotes[1].with_status(QuoteStatus.COMPLETED, at=quotes[1].updated_at)

    async with session_factory() as session:
        repo = SqlAlchemyQuoteRepository(session=session)
        for q in quotes:
            await repo.add(q)
        await session.commit()

    async with session_factory() as session:
        repo = SqlAlchemyQuoteRepository(session=session)
        page, total = await repo.list(offset=1, limit=2)
        completed, completed_total = await repo.list(status=QuoteStatus.COMPLETED)

    assert total == 5
    assert [q.id for q in page] == [quotes[3].id, quotes[2].id]
    assert completed_total == 1
    assert [q.id for q in completed] == [quotes[1].id]


@pytest.mark.asyncio
async def test_update_status_changes_only_status_and_timestamp(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    quote = build_quote()
    later = quote.updated_at + timedelta(hours=2)

    async with session_factory() as session:
        repo = SqlAlchemyQuoteRepository(session=session)
        await repo.add(quote)
        updated = await repo.update_status(quote.id, QuoteStatus.CANCELLED, updated_at=later)
        missing = await repo.update_status(build_quote().id, QuoteStatus.CANCELLED, updated_at=later)
        await session.commit()

    assert updated is not None
    assert updated.status is QuoteStatus.CANCELLED
    assert updated.updated_at == later
    assert updated.created_at == quote.created_at
    assert updated.email == quote.email
    assert missing is None


@pytest.mark.asyncio
async def test_unit_of_work_commits(session_factory: async_sessionmaker[AsyncSession]) -> None:
    quote = build_quote()

    async with SqlAlchemyUnitOfWork(session_factory=session_factory) as uow:
        await uow.get_repository(QuoteRepository).add(quote)
        await uow.commit()

    async with session_factory() as session:
        assert await SqlAlchemyQuoteRepository(session=session).get(quote.id) is not None


@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_on_error(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    quote = build_quote()

    with pytest.raises(RuntimeError):
        async with SqlAlchemyUnitOfWork(session_factory=session_factory) as uow:
            await uow.get_repository(QuoteRepository).add(quote)
            raise RuntimeError("abort")

    async with session_factory() as session:
        assert await SqlAlchemyQuoteRepository(session=session).get(quote.id) is None


@pytest.mark.asyncio
async def test_repository_requires_active_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    with pytest.raises(RuntimeError):
        SqlAlchemyUnitOfWork(session_factory=session_factory).get_repository(QuoteRepository)
