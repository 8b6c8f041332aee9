# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Contact Router.

Summary:
    Contact-form endpoint on ``/contact`` and the legacy ``/api/qi/contact``.
    The company and client mails are sent before answering; a delivery
    failure is reported as 500.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, Response, status

from oregonchem_api.adapters.controllers.contact_controller import ContactController
from oregonchem_api.adapters.presenters.base_presenter import BasePresenter
from oregonchem_api.adapters.routers.base_router import BaseRouter
from oregonchem_api.adapters.schemas.http.contact import ContactRequest
from oregonchem_api.adapters.schemas.http.envelopes import ApiEnvelope
from oregonchem_api.application.schemas.dto.contact import ContactMessageDTO
from oregonchem_api.dependencies.quotes import get_contact_controller
from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.domain.exceptions.quotes import QuoteValidationError
from oregonchem_api.infrastructure.http.errors import trace_id_for

router = BaseRouter(tags=["Contact"])
presenter = BasePresenter()

CONTACT_SENT_MESSAGE = "Mensaje enviado exitosamente."
CONTACT_FAILED_MESSAGE = "Failed to send message"


@router.post(
    "/contact",
    response_model=ApiEnvelope[None],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Send a contact-form message",
)
@router.post(
    "/api/qi/contact",
    response_model=ApiEnvelope[None],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def send_contact(
    request: Request,
    response: Response,
    payload: ContactRequest,
    controller: Annotated[ContactController, Depends(get_contact_controller)],
) -> ApiEnvelope[Any]:
    trace_id = trace_id_for(request)
    try:
        await controller.send(ContactMessageDTO.model_validate(payload.model_dump()))
    except QuoteValidationError as exc:
        return BaseRouter.send_domain_error(response, exc, trace_id=trace_id)
    except DomainError as exc:
        return BaseRouter.send_domain_error(
            response, exc, trace_id=trace_id, message=CONTACT_FAILED_MESSAGE
        )
    return presenter.apply(
        presenter.present_success(data=None, message=CONTACT_SENT_MESSAGE, trace_id=trace_id),
        response,
    )
