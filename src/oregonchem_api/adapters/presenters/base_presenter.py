# src/oregonchem_api/adapters/presenters/base_presenter.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Envelope assembly shared by the quote and contact routes.

A presenter never touches the response itself; it returns a
:class:`PresentResult` that the route applies with :meth:`BasePresenter.apply`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeAlias, TypeVar

from fastapi import Response

from oregonchem_api.adapters.schemas.http.envelopes import ApiEnvelope, Pagination
from oregonchem_api.infrastructure.middleware.request_id import REQUEST_ID_HEADER

Envelope: TypeAlias = ApiEnvelope[Any]

T = TypeVar("T")


@dataclass(slots=True)
class PresentResult(Generic[T]):
    body: T
    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)


class BasePresenter:
    """Builds success, page and error envelopes."""

    @staticmethod
    def _result(
        body: Envelope, trace_id: str | None, status_code: int | None = None
    ) -> PresentResult[Envelope]:
        headers = {REQUEST_ID_HEADER: trace_id} if trace_id else {}
        return PresentResult(body=body, status_code=status_code, headers=headers)

    def present_success(
        self,
        *,
        data: Any,
        message: str | None = None,
        status_code: int | None = None,
        trace_id: str | None = None,
    ) -> PresentResult[Envelope]:
        envelope = ApiEnvelope[Any](success=True, data=data, message=message)
        return self._result(envelope, trace_id, status_code)

    def present_paginated(
        self,
        *,
        items: list[Any],
        page: int,
        limit: int,
        total: int,
        pages: int,
        trace_id: str | None = None,
    ) -> PresentResult[Envelope]:
        pagination = Pagination(page=page, limit=limit, total=total, pages=pages)
        return self._result(
            ApiEnvelope[Any](success=True, data=items, pagination=pagination), trace_id
        )

    def present_error(
        self,
        *,
        http_status: int,
        message: str,
        code: str | None = None,
        error: str | None = None,
        trace_id: str | None = None,
    ) -> PresentResult[Envelope]:
        envelope = ApiEnvelope[Any](
            success=False, message=message, error=error, code=code, trace_id=trace_id
        )
        return self._result(envelope, trace_id, int(http_status))

    @staticmethod
    def apply(result: PresentResult[Envelope], response: Response) -> Envelope:
        """Copy status and headers onto ``response``; return the body for FastAPI."""
        for name, value in result.headers.items():
            response.headers[name] = value
        if result.status_code is not None:
            response.status_code = result.status_code
        return result.body
