# tests/conftest.py
from __future__ import annotations

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fakes import FakeCatalog, FakeNotifier, FakeRenderer, FakeUnitOfWork  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from oregonchem_api.config.settings import get_settings  # noqa: E402
from oregonchem_api.dependencies import quotes as deps  # noqa: E402
from oregonchem_api.infrastructure.database.models.base import Base  # noqa: E402
from oregonchem_api.main import create_app  # noqa: E402

# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------


@pytest.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with the full schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'oregonchem.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=sqlite_engine, expire_on_commit=False, class_=AsyncSession)


# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(products={"prod-1": "Soda Cáustica", "prod-2": "Ácido Sulfúrico"})


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def app(
    fake_uow: FakeUnitOfWork,
    fake_catalog: FakeCatalog,
    fake_renderer: FakeRenderer,
    fake_notifier: FakeNotifier,
) -> FastAPI:
    """Fresh application with every I/O seam replaced by a fake."""
    get_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[deps.get_quote_uow] = lambda: fake_uow
    application.dependency_overrides[deps.get_catalog_lookup] = lambda: fake_catalog
    application.dependency_overrides[deps.get_document_renderer] = lambda: fake_renderer
    application.dependency_overrides[deps.get_notifier] = lambda: fake_notifier
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
