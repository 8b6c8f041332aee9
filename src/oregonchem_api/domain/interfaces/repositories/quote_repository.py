# src/oregonchem_api/domain/interfaces/repositories/quote_repository.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Quote repository interface.

Purpose:
    Persistence operations for quote records: create, get by id, filtered
    paginated listing and status update. Records are never hard-deleted.

Layer:
    domain/interfaces/repositories

Notes:
    Implementations never commit; the surrounding unit of work owns the
    transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

from oregonchem_api.domain.entities.quote import Quote
from oregonchem_api.domain.enums.quotes import QuoteStatus


class QuoteRepository(Protocol):
    """Protocol for the quote record store."""

    async def add(self, quote: Quote) -> Quote:
        """Stage a new quote for insertion and return it as stored."""
        ...

    async def get(self, quote_id: UUID) -> Quote | None:
        """Return the quote with ``quote_id`` or ``None``."""
        ...

    async def list(
        self,
        *,
        status: QuoteStatus | None,
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Quote], int]:
        """Return one page of quotes (newest first) and the total match count."""
        ...

    async def update_status(
        self,
        quote_id: UUID,
        status: QuoteStatus,
        *,
        updated_at: datetime,
    ) -> Quote | None:
        """Set a new status, touch ``updated_at`` and return the updated quote.

        Returns ``None`` when no quote matches ``quote_id``.
        """
        ...
