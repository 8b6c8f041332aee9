# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Use Case: Get Quote

Purpose:
    Fetch a single quote by identifier. Read-only; repeated calls return the
    same data.

Layer: application/use_cases
"""

from __future__ import annotations

from uuid import UUID

from oregonchem_api.application.schemas.dto.quotes import QuoteDTO
from oregonchem_api.application.uow import UnitOfWork
from oregonchem_api.domain.exceptions.quotes import QuoteNotFound
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository


class GetQuoteUseCase:
    """Fetch one quote.

    Raises:
        QuoteNotFound: If no quote matches the identifier.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, quote_id: UUID) -> QuoteDTO:
        async with self._uow as tx:
            repo: QuoteRepository = tx.get_repository(QuoteRepository)
            quote = await repo.get(quote_id)
        if quote is None:
            raise QuoteNotFound("Cotización no encontrada", details={"id": str(quote_id)})
        return QuoteDTO.from_entity(quote)
