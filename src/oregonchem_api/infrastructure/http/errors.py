# src/oregonchem_api/infrastructure/http/errors.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Global exception handlers producing the API envelope.

Every error leaving the service has the same shape:

    {"success": false, "message": ..., "error": ..., "code": ..., "trace_id": ...}

Request validation failures are answered with 400, not FastAPI's 422, to keep
the storefront contract.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.responses import Response

from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.domain.exceptions.quotes import (
    NotificationDispatchError,
    QuoteNotFound,
    QuotePersistenceError,
    QuoteValidationError,
)
from oregonchem_api.infrastructure.logging.logger import get_json_logger, get_request_id

logger = get_json_logger(__name__)

VALIDATION_MESSAGE = "Datos inválidos"
INTERNAL_MESSAGE = "Error interno del servidor"
PERSISTENCE_MESSAGE = "Error al crear la cotización"

_DOMAIN_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (QuoteNotFound, status.HTTP_404_NOT_FOUND),
    (QuoteValidationError, status.HTTP_400_BAD_REQUEST),
    (QuotePersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (NotificationDispatchError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def trace_id_for(request: Request) -> str | None:
    """Return the request correlation id (middleware state, then contextvar)."""
    rid = getattr(getattr(request, "state", None), "request_id", None)
    return rid or get_request_id()


def domain_error_status(exc: DomainError) -> int:
    """HTTP status for a domain error (first matching class wins)."""
    for cls, code in _DOMAIN_STATUS:
        if isinstance(exc, cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_message(exc: DomainError) -> str:
    """Client-facing message for a domain error."""
    if isinstance(exc, QuotePersistenceError):
        return PERSISTENCE_MESSAGE
    if domain_error_status(exc) >= 500:
        return INTERNAL_MESSAGE
    return str(exc) or VALIDATION_MESSAGE


def error_envelope(
    *,
    message: str,
    error: str | None = None,
    code: str | None = None,
    trace_id: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        payload["error"] = error
    if code is not None:
        payload["code"] = code
    if trace_id is not None:
        payload["trace_id"] = trace_id
    return payload


def _describe_validation(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    payload = error_envelope(
        message=VALIDATION_MESSAGE,
        error=_describe_validation(exc),
        code="VALIDATION_ERROR",
        trace_id=trace_id_for(request),
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def handle_domain_error(request: Request, exc: DomainError) -> Response:
    http_status = domain_error_status(exc)
    if http_status >= 500:
        logger.error(
            "domain_error",
            extra={"extra": {"code": exc.code, "error": str(exc), "details": exc.details}},
        )
    payload = error_envelope(
        message=domain_error_message(exc),
        error=str(exc) or None,
        code=exc.code,
        trace_id=trace_id_for(request),
    )
    return JSONResponse(status_code=http_status, content=payload)


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    payload = error_envelope(
        message=message,
        code="HTTP_ERROR",
        trace_id=trace_id_for(request),
    )
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


async def handle_unhandled_exception(request: Request, exc: Exception) -> Response:
    logger.exception(
        "unhandled_exception",
        extra={"extra": {"path": request.url.path, "error": str(exc)}},
    )
    payload = error_envelope(
        message=INTERNAL_MESSAGE,
        error=type(exc).__name__,
        code="INTERNAL_ERROR",
        trace_id=trace_id_for(request),
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
