# src/oregonchem_api/adapters/schemas/http/quotes.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote HTTP Schemas

Purpose:
    Request and response bodies for the quote endpoints, in the storefront's
    camelCase. The storefront form still posts the legacy ``comments`` field
    on some pages; it is accepted here and folded into ``observations`` by the
    submission mapper.

Layer: adapters/schemas/http
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from oregonchem_api.adapters.schemas.http.base import CamelHTTPSchema
from oregonchem_api.domain.entities.quote import (
    COMPANY_NAME_MAX_LENGTH,
    DOCUMENT_ID_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    SOURCE_MAX_LENGTH,
)
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus

#: Catalog identifiers are UUIDs or 24-char object ids; labels are short display text.
CATALOG_ID_MAX_LENGTH = 64
PRESENTATION_LABEL_MAX_LENGTH = 120


class ContactPreferencesPayload(CamelHTTPSchema):
    """Selected contact channels."""

    model_config = ConfigDict(extra="ignore")

    email: bool = False
    whatsapp: bool = False
    phone: bool = False


class QuoteItemRequest(CamelHTTPSchema):
    """One requested product."""

    model_config = ConfigDict(extra="ignore")

    product_id: str = Field(..., min_length=1, max_length=CATALOG_ID_MAX_LENGTH)
    presentation_id: str | None = Field(default=None, max_length=CATALOG_ID_MAX_LENGTH)
    presentation_label: str | None = Field(default=None, max_length=PRESENTATION_LABEL_MAX_LENGTH)
    quantity: int = Field(..., gt=0)
    frequency: PurchaseFrequency


class QuoteSubmissionRequest(CamelHTTPSchema):
    """Body of ``POST /quotes``."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "clientType": "natural",
                "firstName": "Ana",
                "lastName": "Quispe",
                "dni": "45678912",
                "phone": "+51 987 654 321",
                "email": "ana@example.pe",
                "products": [
                    {
                        "productId": "8b6f3c0e-1f0a-4d8e-9a53-3f3c2a1b9d10",
                        "presentationLabel": "Bolsa 25 kg",
                        "quantity": 4,
                        "frequency": "mensual",
                    }
                ],
                "contactPreferences": {"email": True, "whatsapp": True, "phone": False},
                "observations": "Entrega en Callao.\nHorario de mañana.",
            }
        },
    )

    client_type: ClientType
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    dni: str = Field(..., min_length=1, max_length=DOCUMENT_ID_MAX_LENGTH)
    phone: str = Field(..., min_length=1, max_length=PHONE_MAX_LENGTH)
    email: str = Field(
        ..., min_length=3, max_length=EMAIL_MAX_LENGTH, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    company_name: str | None = Field(default=None, max_length=COMPANY_NAME_MAX_LENGTH)
    ruc: str | None = Field(default=None, max_length=DOCUMENT_ID_MAX_LENGTH)
    products: list[QuoteItemRequest] = Field(default_factory=list)
    contact_preferences: ContactPreferencesPayload = Field(
        default_factory=ContactPreferencesPayload
    )
    observations: str | None = None
    comments: str | None = None
    source: str | None = Field(default=None, max_length=SOURCE_MAX_LENGTH)


class QuoteStatusUpdateRequest(CamelHTTPSchema):
    """Body of ``PATCH /quotes/{id}/status``; membership is checked by the use case."""

    model_config = ConfigDict(extra="ignore")

    status: str | None = None


class QuoteLineItemResponse(CamelHTTPSchema):
    """Stored line item."""

    product_id: str
    product_name: str
    presentation_id: str | None = None
    presentation_label: str | None = None
    quantity: int
    frequency: PurchaseFrequency


class QuoteResponse(CamelHTTPSchema):
    """Quote resource."""

    id: UUID
    client_type: ClientType
    first_name: str
    last_name: str
    dni: str
    phone: str
    email: str
    company_name: str | None = None
    ruc: str | None = None
    products: list[QuoteLineItemResponse]
    contact_preferences: ContactPreferencesPayload
    observations: str
    status: QuoteStatus
    source: str
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime
    updated_at: datetime
