# src/oregonchem_api/infrastructure/database/models/quotes.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Quote Models.

Purpose:
    Persistence shape for quote requests. Line items and contact preferences
    are stored as JSON documents on the quote row; product names inside the
    line items are the values resolved at submission time.

Layer:
    infrastructure

Notes:
    Domain contract: ``oregonchem_api.domain.interfaces.repositories.quote_repository``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from oregonchem_api.domain.entities.quote import (
    COMPANY_NAME_MAX_LENGTH,
    DOCUMENT_ID_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    IP_ADDRESS_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    SOURCE_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
)
from oregonchem_api.infrastructure.database.models.base import (
    Base,
    IdentityMixin,
    TimestampMixin,
)


class QuoteRecord(IdentityMixin, TimestampMixin, Base):
    """Persistence model for a quote request.

    Attributes:
        client_type: Wire value of the client type (``natural``, ``empresa``...).
        first_name: Client first name.
        last_name: Client last name.
        dni: National identity document number.
        phone: Contact phone.
        email: Contact e-mail.
        company_name: Company name, when the client represents one.
        ruc: Company tax id, when present.
        products: JSON list of line items.
        contact_preferences: JSON object ``{email, whatsapp, phone}``.
        observations: Free text; may contain newlines.
        status: ``pending`` | ``processing`` | ``completed`` | ``cancelled``.
        source: Submission channel.
        ip_address: Client IP captured at submission.
        user_agent: Client user agent captured at submission.
    """

    __tablename__ = "quotes"
    __table_args__ = (
        Index("ix_quotes_status_created_at", "status", "created_at"),
        Index("ix_quotes_email", "email"),
    )

    client_type: Mapped[str] = mapped_column(String(length=32), nullable=False)
    first_name: Mapped[str] = mapped_column(String(length=NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(length=NAME_MAX_LENGTH), nullable=False)
    dni: Mapped[str] = mapped_column(String(length=DOCUMENT_ID_MAX_LENGTH), nullable=False)
    phone: Mapped[str] = mapped_column(String(length=PHONE_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(length=EMAIL_MAX_LENGTH), nullable=False)
    company_name: Mapped[str | None] = mapped_column(
        String(length=COMPANY_NAME_MAX_LENGTH), nullable=True
    )
    ruc: Mapped[str | None] = mapped_column(String(length=DOCUMENT_ID_MAX_LENGTH), nullable=True)
    products: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    contact_preferences: Mapped[dict[str, bool]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
    observations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String(length=16),
        nullable=False,
        default="pending",
        server_default="pending",
    )
    source: Mapped[str] = mapped_column(
        String(length=SOURCE_MAX_LENGTH),
        nullable=False,
        default="website",
        server_default="website",
    )
    ip_address: Mapped[str | None] = mapped_column(
        String(length=IP_ADDRESS_MAX_LENGTH), nullable=True
    )
    user_agent: Mapped[str | None] = mapped_column(
        String(length=USER_AGENT_MAX_LENGTH), nullable=True
    )
