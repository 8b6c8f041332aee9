# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Use Case: List Quotes

Purpose:
    Page through quotes newest first, optionally filtered by status.

Layer: application/use_cases
"""

from __future__ import annotations

import math

from oregonchem_api.application.schemas.dto.quotes import QuoteDTO, QuotePageDTO
from oregonchem_api.application.uow import UnitOfWork
from oregonchem_api.domain.enums.quotes import QuoteStatus
from oregonchem_api.domain.exceptions.quotes import QuoteValidationError
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class ListQuotesUseCase:
    """List quotes with status filter and page/limit pagination.

    ``pages`` is ``ceil(total / limit)``, so an empty result reports zero pages.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(
        self,
        *,
        status: QuoteStatus | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> QuotePageDTO:
        """Return one page of quotes.

        Raises:
            QuoteValidationError: If ``page`` or ``limit`` is out of range.
        """
        if page < 1:
            raise QuoteValidationError("page must be >= 1", details={"page": page})
        if not 1 <= limit <= MAX_LIMIT:
            raise QuoteValidationError(
                f"limit must be between 1 and {MAX_LIMIT}",
                details={"limit": limit},
            )

        async with self._uow as tx:
            repo: QuoteRepository = tx.get_repository(QuoteRepository)
            quotes, total = await repo.list(
                status=status,
                offset=(page - 1) * limit,
                limit=limit,
            )

        return QuotePageDTO(
            items=[QuoteDTO.from_entity(q) for q in quotes],
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        )
