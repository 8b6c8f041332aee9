# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quotes Controller.

Summary:
    Thin adapter coordinating the quote use-cases: submission, lookup,
    listing and status update.

Layer:
    adapters/controllers
"""
from __future__ import annotations

from uuid import UUID

from oregonchem_api.application.schemas.dto.quotes import (
    QuoteDTO,
    QuotePageDTO,
    QuoteSubmissionDTO,
    RequestProvenanceDTO,
)
from oregonchem_api.application.use_cases.quotes.get_quote import GetQuoteUseCase
from oregonchem_api.application.use_cases.quotes.list_quotes import ListQuotesUseCase
from oregonchem_api.application.use_cases.quotes.submit_quote import SubmitQuoteUseCase
from oregonchem_api.application.use_cases.quotes.update_quote_status import (
    UpdateQuoteStatusUseCase,
)
from oregonchem_api.domain.enums.quotes import QuoteStatus
from oregonchem_api.domain.exceptions.quotes import InvalidQuoteStatus


class QuotesController:
    """Controller for the quote endpoints."""

    __slots__ = ("_get", "_list", "_submit", "_update_status")

    def __init__(
        self,
        *,
        submit: SubmitQuoteUseCase,
        get: GetQuoteUseCase,
        list_: ListQuotesUseCase,
        update_status: UpdateQuoteStatusUseCase,
    ) -> None:
        self._submit = submit
        self._get = get
        self._list = list_
        self._update_status = update_status

    async def submit(
        self,
        submission: QuoteSubmissionDTO,
        provenance: RequestProvenanceDTO,
    ) -> QuoteDTO:
        """Run the submission pipeline and return the stored quote."""
        result = await self._submit.execute(submission, provenance)
        return QuoteDTO.from_entity(result.quote)

    async def get(self, quote_id: UUID) -> QuoteDTO:
        return await self._get.execute(quote_id)

    async def list(self, *, status: str | None, page: int, limit: int) -> QuotePageDTO:
        """List quotes; ``status`` is parsed here so bad filters get the status error."""
        status_filter: QuoteStatus | None = None
        if status:
            try:
                status_filter = QuoteStatus(status)
            except ValueError as exc:
                raise InvalidQuoteStatus("Estado inválido", details={"status": status}) from exc
        return await self._list.execute(status=status_filter, page=page, limit=limit)

    async def update_status(self, quote_id: UUID, status: str | None) -> QuoteDTO:
        return await self._update_status.execute(quote_id, status)
