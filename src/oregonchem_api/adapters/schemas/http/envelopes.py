# src/oregonchem_api/adapters/schemas/http/envelopes.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""HTTP Envelopes (Adapters Layer).

Purpose:
    The single response envelope used by every quote and contact endpoint:

        {"success": bool, "data"?, "message"?, "error"?, "code"?,
         "trace_id"?, "pagination"?}

    Absent members are omitted from the JSON body.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import Field

from oregonchem_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = ["ApiEnvelope", "ErrorEnvelope", "Pagination"]


class Pagination(BaseHTTPSchema):
    """Page counters for list responses."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)


T = TypeVar("T")


class ApiEnvelope(BaseHTTPSchema, Generic[T]):
    """Uniform success/error envelope."""

    success: bool
    data: T | None = None
    message: str | None = None
    error: str | None = Field(default=None, description="Failure detail.")
    code: str | None = Field(default=None, description="Stable machine-readable error code.")
    trace_id: str | None = Field(default=None, description="Request correlation identifier.")
    pagination: Pagination | None = None


class ErrorEnvelope(ApiEnvelope[None]):
    """Envelope shape for error responses (OpenAPI documentation)."""

    success: bool = False
