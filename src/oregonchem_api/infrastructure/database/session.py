# src/oregonchem_api/infrastructure/database/session.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Process-wide engine and session factory for the quote and catalog tables.

The lifespan calls :func:`open_database` on startup and
:func:`close_database` on shutdown. Code that runs without a lifespan (ASGI
test transports, one-off scripts) gets the engine lazily from
:func:`get_sessionmaker`.
"""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from oregonchem_api.config.settings import Settings, get_settings
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


def open_database(settings: Settings) -> async_sessionmaker[AsyncSession]:
    """Create the engine for ``settings.database_url`` once and return the session factory."""
    global _engine, _sessions
    if _sessions is not None:
        return _sessions

    url = make_url(settings.database_url)
    _engine = create_async_engine(url, pool_pre_ping=url.get_backend_name() != "sqlite")
    _sessions = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
    logger.info(
        "database_opened",
        extra={"extra": {"backend": url.get_backend_name(), "schema": settings.db_schema}},
    )
    return _sessions


async def close_database() -> None:
    """Dispose the engine; the next :func:`get_sessionmaker` call reopens it."""
    global _engine, _sessions
    engine, _engine, _sessions = _engine, None, None
    if engine is not None:
        await engine.dispose()
        logger.info("database_closed", extra={"extra": {}})


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return _sessions if _sessions is not None else open_database(get_settings())
