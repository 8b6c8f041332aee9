# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quotes Router.

Summary:
    Quote submission, lookup, listing and status update. ``POST`` is served on
    both ``/quotes`` and the storefront's legacy ``/api/qi/quotes`` path.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Query, Request, Response, status

from oregonchem_api.adapters.controllers.quotes_controller import QuotesController
from oregonchem_api.adapters.mappers.quote_submission_mapper import (
    to_provenance_dto,
    to_submission_dto,
)
from oregonchem_api.adapters.presenters.quotes_presenter import (
    QUOTE_STATUS_UPDATED_MESSAGE,
    QuotesPresenter,
)
from oregonchem_api.adapters.routers.base_router import BaseRouter
from oregonchem_api.adapters.schemas.http.envelopes import ApiEnvelope
from oregonchem_api.adapters.schemas.http.quotes import (
    QuoteResponse,
    QuoteStatusUpdateRequest,
    QuoteSubmissionRequest,
)
from oregonchem_api.application.use_cases.quotes.list_quotes import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
)
from oregonchem_api.dependencies.quotes import get_quotes_controller
from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.infrastructure.http.errors import trace_id_for

router = BaseRouter(tags=["Quotes"])
presenter = QuotesPresenter()

ControllerDep = Annotated[QuotesController, Depends(get_quotes_controller)]


@router.post(
    "/quotes",
    response_model=ApiEnvelope[QuoteResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a quote request",
)
@router.post(
    "/api/qi/quotes",
    response_model=ApiEnvelope[QuoteResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_quote(
    request: Request,
    response: Response,
    payload: QuoteSubmissionRequest,
    controller: ControllerDep,
) -> ApiEnvelope[Any]:
    """Store the quote, then render and mail it (best effort)."""
    trace_id = trace_id_for(request)
    try:
        dto = await controller.submit(to_submission_dto(payload), to_provenance_dto(request))
    except DomainError as exc:
        return BaseRouter.send_domain_error(response, exc, trace_id=trace_id)
    return presenter.apply(presenter.present_created(dto, trace_id=trace_id), response)


@router.get(
    "/quotes",
    response_model=ApiEnvelope[list[QuoteResponse]],
    response_model_exclude_none=True,
    summary="List quotes",
)
async def list_quotes(
    request: Request,
    response: Response,
    controller: ControllerDep,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=MAX_LIMIT)] = DEFAULT_LIMIT,
) -> ApiEnvelope[Any]:
    """Newest first, optionally filtered by status."""
    trace_id = trace_id_for(request)
    try:
        page_dto = await controller.list(status=status_filter, page=page, limit=limit)
    except DomainError as exc:
        return BaseRouter.send_domain_error(response, exc, trace_id=trace_id)
    return presenter.apply(presenter.present_page(page_dto, trace_id=trace_id), response)


@router.get(
    "/quotes/{quote_id}",
    response_model=ApiEnvelope[QuoteResponse],
    response_model_exclude_none=True,
    summary="Get a quote",
)
async def get_quote(
    request: Request,
    response: Response,
    quote_id: UUID,
    controller: ControllerDep,
) -> ApiEnvelope[Any]:
    trace_id = trace_id_for(request)
    try:
        dto = await controller.get(quote_id)
    except DomainError as exc:
        return BaseRouter.send_domain_error(response, exc, trace_id=trace_id)
    return presenter.apply(presenter.present_quote(dto, trace_id=trace_id), response)


@router.patch(
    "/quotes/{quote_id}/status",
    response_model=ApiEnvelope[QuoteResponse],
    response_model_exclude_none=True,
    summary="Update a quote's status",
)
async def update_quote_status(
    request: Request,
    response: Response,
    quote_id: UUID,
    payload: QuoteStatusUpdateRequest,
    controller: ControllerDep,
) -> ApiEnvelope[Any]:
    trace_id = trace_id_for(request)
    try:
        dto = await controller.update_status(quote_id, payload.status)
    except DomainError as exc:
        return BaseRouter.send_domain_error(response, exc, trace_id=trace_id)
    return presenter.apply(
        presenter.present_quote(dto, message=QUOTE_STATUS_UPDATED_MESSAGE, trace_id=trace_id),
        response,
    )
