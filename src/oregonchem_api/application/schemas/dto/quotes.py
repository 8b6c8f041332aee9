# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Quote DTOs (Application Layer).

Purpose:
    Inputs and outputs of the quote use cases: the normalized submission,
    request provenance, the quote read model and a result page.

Layer: application/schemas/dto
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from oregonchem_api.application.schemas.dto.base import BaseDTO
from oregonchem_api.domain.entities.quote import DEFAULT_SOURCE, Quote
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus


class ContactPreferencesDTO(BaseDTO):
    """Selected contact channels."""

    email: bool = False
    whatsapp: bool = False
    phone: bool = False


class QuoteItemInputDTO(BaseDTO):
    """A requested product before catalog enrichment."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    frequency: PurchaseFrequency
    presentation_id: str | None = None
    presentation_label: str | None = None


class QuoteSubmissionDTO(BaseDTO):
    """Normalized quote submission (boundary aliases already resolved)."""

    client_type: ClientType
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    dni: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    company_name: str | None = None
    ruc: str | None = None
    products: list[QuoteItemInputDTO] = Field(default_factory=list)
    contact_preferences: ContactPreferencesDTO = Field(default_factory=ContactPreferencesDTO)
    observations: str = ""
    source: str = DEFAULT_SOURCE


class RequestProvenanceDTO(BaseDTO):
    """Request context captured by the HTTP adapter."""

    ip_address: str | None = None
    user_agent: str | None = None


class QuoteLineItemDTO(BaseDTO):
    """Enriched line item as stored."""

    product_id: str
    product_name: str
    presentation_id: str | None = None
    presentation_label: str | None = None
    quantity: int
    frequency: PurchaseFrequency


class QuoteDTO(BaseDTO):
    """Quote read model."""

    id: UUID
    client_type: ClientType
    first_name: str
    last_name: str
    dni: str
    phone: str
    email: str
    company_name: str | None = None
    ruc: str | None = None
    products: list[QuoteLineItemDTO]
    contact_preferences: ContactPreferencesDTO
    observations: str
    status: QuoteStatus
    source: str
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, quote: Quote) -> QuoteDTO:
        """Map a domain :class:`Quote` to its DTO."""
        prefs = quote.contact_preferences
        return cls(
            id=quote.id,
            client_type=quote.client_type,
            first_name=quote.first_name,
            last_name=quote.last_name,
            dni=quote.dni,
            phone=quote.phone,
            email=quote.email,
            company_name=quote.company_name,
            ruc=quote.ruc,
            products=[
                QuoteLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    presentation_id=item.presentation_id,
                    presentation_label=item.presentation_label,
                    quantity=item.quantity,
                    frequency=item.frequency,
                )
                for item in quote.products
            ],
            contact_preferences=ContactPreferencesDTO(
                email=prefs.email,
                whatsapp=prefs.whatsapp,
                phone=prefs.phone,
            ),
            observations=quote.observations,
            status=quote.status,
            source=quote.source,
            ip_address=quote.ip_address,
            user_agent=quote.user_agent,
            created_at=quote.created_at,
            updated_at=quote.updated_at,
        )


class QuotePageDTO(BaseDTO):
    """One page of quotes plus pagination counters."""

    items: list[QuoteDTO]
    page: int
    limit: int
    total: int
    pages: int
