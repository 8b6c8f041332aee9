# src/oregonchem_api/application/uow.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Transaction boundary for the quote use cases.

Use cases see only this protocol. The SQLAlchemy implementation lives in
``adapters/uow``; tests substitute an in-memory one.

Layer: application
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, Protocol, Self, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class UnitOfWork(Protocol):
    """One transactional scope over the quote store.

    Repositories obtained from :meth:`get_repository` share the scope's
    session and are only valid inside ``async with``.
    """

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the repository registered under ``repo_type``."""
        ...


async def run_in_uow(uow: UnitOfWork, work: Callable[[UnitOfWork], Awaitable[T]]) -> T:
    """Run ``work`` inside ``uow``; commit when it returns, roll back when it raises."""
    async with uow as tx:
        try:
            result = await work(tx)
        except Exception:
            await tx.rollback()
            raise
        await tx.commit()
        return result
