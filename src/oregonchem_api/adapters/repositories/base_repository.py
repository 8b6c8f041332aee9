# src/oregonchem_api/adapters/repositories/base_repository.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Session-bound query helpers shared by the SQLAlchemy repositories.

Repositories flush but never commit; the unit of work owns the transaction.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, nulls_last, select
from sqlalchemy.ext.asyncio import AsyncSession


TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def order_by_created(stmt: Select[Any], created_col: Any, pk_col: Any) -> Select[Any]:
        """Newest first; the primary key breaks ties so pages are stable."""
        return stmt.order_by(nulls_last(created_col.desc()), pk_col.asc())

    async def fetch_optional(self, stmt: Select[Any]) -> TModel | None:
        return (await self._session.scalars(stmt)).first()

    async def fetch_all(self, stmt: Select[Any]) -> list[TModel]:
        return list((await self._session.scalars(stmt)).all())

    async def count(self, stmt: Select[Any]) -> int:
        """Rows matched by ``stmt``, ignoring any ordering."""
        counted = select(func.count()).select_from(stmt.order_by(None).subquery())
        return int(await self._session.scalar(counted) or 0)
