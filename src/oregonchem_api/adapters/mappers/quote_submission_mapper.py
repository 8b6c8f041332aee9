# src/oregonchem_api/adapters/mappers/quote_submission_mapper.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote Submission Mapper

Purpose:
    Translate HTTP payloads into application DTOs:

        * ``observations`` wins; the legacy ``comments`` field is used only
          when ``observations`` is empty. Nothing past this boundary knows
          about ``comments``.
        * Provenance prefers the first ``X-Forwarded-For`` hop over the peer
          address. Header values are cut to their storage width, so an
          oversized header never fails a submission.

Layer: adapters/mappers
"""

from __future__ import annotations

from fastapi import Request

from oregonchem_api.adapters.schemas.http.quotes import QuoteSubmissionRequest
from oregonchem_api.application.schemas.dto.quotes import (
    ContactPreferencesDTO,
    QuoteItemInputDTO,
    QuoteSubmissionDTO,
    RequestProvenanceDTO,
)
from oregonchem_api.domain.entities.quote import (
    DEFAULT_SOURCE,
    IP_ADDRESS_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def to_submission_dto(payload: QuoteSubmissionRequest) -> QuoteSubmissionDTO:
    """Return the normalized submission for ``payload``."""
    observations = payload.observations if payload.observations else payload.comments
    prefs = payload.contact_preferences
    return QuoteSubmissionDTO(
        client_type=payload.client_type,
        first_name=payload.first_name,
        last_name=payload.last_name,
        dni=payload.dni,
        phone=payload.phone,
        email=payload.email,
        company_name=_blank_to_none(payload.company_name),
        ruc=_blank_to_none(payload.ruc),
        products=[
            QuoteItemInputDTO(
                product_id=item.product_id,
                quantity=item.quantity,
                frequency=item.frequency,
                presentation_id=_blank_to_none(item.presentation_id),
                presentation_label=_blank_to_none(item.presentation_label),
            )
            for item in payload.products
        ],
        contact_preferences=ContactPreferencesDTO(
            email=prefs.email,
            whatsapp=prefs.whatsapp,
            phone=prefs.phone,
        ),
        observations=observations or "",
        source=_blank_to_none(payload.source) or DEFAULT_SOURCE,
    )


def _clip(value: str | None, limit: int) -> str | None:
    return value[:limit] if value else None


def to_provenance_dto(request: Request) -> RequestProvenanceDTO:
    """Capture the client IP and user agent of ``request``."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() or (request.client.host if request.client else None)
    return RequestProvenanceDTO(
        ip_address=_clip(ip, IP_ADDRESS_MAX_LENGTH),
        user_agent=_clip(request.headers.get("user-agent"), USER_AGENT_MAX_LENGTH),
    )
