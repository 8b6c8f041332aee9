# src/oregonchem_api/adapters/routers/base_router.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Router base for the envelope-speaking endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Response

from oregonchem_api.adapters.presenters.base_presenter import BasePresenter
from oregonchem_api.adapters.schemas.http.envelopes import ApiEnvelope, ErrorEnvelope
from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.infrastructure.http.errors import domain_error_message, domain_error_status
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorEnvelope, "description": description}
    for code, description in (
        (400, "Invalid input."),
        (404, "Quote not found."),
        (500, "Internal error."),
    )
}


class BaseRouter(APIRouter):
    """``APIRouter`` whose routes document the error envelope by default."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("responses", ERROR_RESPONSES)
        super().__init__(**kwargs)

    @staticmethod
    def send_domain_error(
        response: Response,
        exc: DomainError,
        *,
        trace_id: str | None,
        message: str | None = None,
    ) -> ApiEnvelope[Any]:
        """Answer ``exc`` from inside a route with its mapped status and code."""
        status_code = domain_error_status(exc)
        logger.info(
            "domain_error_returned",
            extra={"extra": {"code": exc.code, "status": status_code}},
        )
        presenter = BasePresenter()
        return presenter.apply(
            presenter.present_error(
                http_status=status_code,
                message=message or domain_error_message(exc),
                code=exc.code,
                error=str(exc) or None,
                trace_id=trace_id,
            ),
            response,
        )
