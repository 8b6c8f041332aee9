# src/oregonchem_api/infrastructure/health/probe.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Database reachability check used by the readiness and ``/api/health`` routes."""

from __future__ import annotations

import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oregonchem_api.infrastructure.observability.metrics import get_readyz_db_latency_seconds


class DbProbe:
    """Runs ``SELECT 1`` on a fresh session; latency is always recorded."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def db(self) -> tuple[bool, str | None]:
        started = time.perf_counter()
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            return False, str(exc)
        finally:
            get_readyz_db_latency_seconds().observe(time.perf_counter() - started)
        return True, None
