# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Quotes presenter: DTOs to HTTP resources inside the envelope."""

from __future__ import annotations

from typing import Any

from fastapi import status

from oregonchem_api.adapters.presenters.base_presenter import BasePresenter, PresentResult
from oregonchem_api.adapters.schemas.http.envelopes import ApiEnvelope
from oregonchem_api.adapters.schemas.http.quotes import QuoteResponse
from oregonchem_api.application.schemas.dto.quotes import QuoteDTO, QuotePageDTO

QUOTE_CREATED_MESSAGE = "Cotización creada exitosamente"
QUOTE_STATUS_UPDATED_MESSAGE = "Estado actualizado exitosamente"


def to_response(dto: QuoteDTO) -> QuoteResponse:
    """Map a quote DTO to its HTTP resource."""
    return QuoteResponse.model_validate(dto.model_dump())


class QuotesPresenter(BasePresenter):
    """Shape quote use-case results."""

    def present_created(
        self, dto: QuoteDTO, *, trace_id: str | None = None
    ) -> PresentResult[ApiEnvelope[Any]]:
        return self.present_success(
            data=to_response(dto),
            message=QUOTE_CREATED_MESSAGE,
            status_code=status.HTTP_201_CREATED,
            trace_id=trace_id,
        )

    def present_quote(
        self,
        dto: QuoteDTO,
        *,
        message: str | None = None,
        trace_id: str | None = None,
    ) -> PresentResult[ApiEnvelope[Any]]:
        return self.present_success(data=to_response(dto), message=message, trace_id=trace_id)

    def present_page(
        self, page: QuotePageDTO, *, trace_id: str | None = None
    ) -> PresentResult[ApiEnvelope[Any]]:
        return self.present_paginated(
            items=[to_response(q) for q in page.items],
            page=page.page,
            limit=page.limit,
            total=page.total,
            pages=page.pages,
            trace_id=trace_id,
        )
