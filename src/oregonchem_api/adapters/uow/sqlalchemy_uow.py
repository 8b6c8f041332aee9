# src/oregonchem_api/adapters/uow/sqlalchemy_uow.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""SQLAlchemy unit of work for the quote store.

Each ``async with`` opens one ``AsyncSession``; repositories requested inside
the block are built on that session and cached until the block exits. An
exception leaving the block rolls the transaction back. Commit is explicit.

Layer: adapters/uow
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oregonchem_api.adapters.repositories.quote_repository import SqlAlchemyQuoteRepository
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository

RepoFactory = Callable[[AsyncSession], Any]


def _quote_repository(session: AsyncSession) -> SqlAlchemyQuoteRepository:
    return SqlAlchemyQuoteRepository(session=session)


class SqlAlchemyUnitOfWork:
    """Unit of work over an ``async_sessionmaker``.

    Args:
        session_factory: Session factory bound to the service engine.
        repo_factories: Extra repository factories keyed by protocol or class.
            ``QuoteRepository`` is always registered.
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        repo_factories: Mapping[type[Any], RepoFactory] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._factories: dict[type[Any], RepoFactory] = {
            QuoteRepository: _quote_repository,
            SqlAlchemyQuoteRepository: _quote_repository,
            **(repo_factories or {}),
        }
        self._session: AsyncSession | None = None
        self._repos: dict[type[Any], Any] = {}
        self._finished = False

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("SqlAlchemyUnitOfWork does not support nested scopes")
        self._session = self._session_factory()
        self._finished = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session, self._session = self._session, None
        self._repos.clear()
        if session is None:
            return
        try:
            if exc_type is not None and not self._finished:
                await session.rollback()
        finally:
            await session.close()

    def _active(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("No active transaction; use 'async with uow:' first")
        return self._session

    async def commit(self) -> None:
        """Commit once; later calls in the same scope are no-ops."""
        session = self._active()
        if not self._finished:
            await session.commit()
            self._finished = True

    async def rollback(self) -> None:
        if self._session is None or self._finished:
            return
        await self._session.rollback()
        self._finished = True

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the scope's repository for ``repo_type``.

        Raises:
            RuntimeError: Outside ``async with``.
            KeyError: If nothing is registered for ``repo_type``.
        """
        session = self._active()
        repo = self._repos.get(repo_type)
        if repo is None:
            if repo_type not in self._factories:
                raise KeyError(f"no repository registered for {repo_type!r}")
            repo = self._repos[repo_type] = self._factories[repo_type](session)
        return repo
