# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote Entity

Purpose:
    Immutable domain representation of a customer quote request (RFQ): the
    client block, enriched line items, contact preferences, observations,
    processing status and provenance. No I/O.

Layer: domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus

from .base import BaseEntity, require_text

DEFAULT_SOURCE = "website"

#: Storage widths of the quote text fields; the HTTP schema and the ORM model share them.
NAME_MAX_LENGTH = 120
DOCUMENT_ID_MAX_LENGTH = 32
PHONE_MAX_LENGTH = 40
EMAIL_MAX_LENGTH = 255
COMPANY_NAME_MAX_LENGTH = 255
SOURCE_MAX_LENGTH = 64
IP_ADDRESS_MAX_LENGTH = 64
USER_AGENT_MAX_LENGTH = 512


@dataclass(frozen=True, slots=True)
class ContactPreferences(BaseEntity):
    """Independent contact-channel flags; zero or more may be set."""

    email: bool = False
    whatsapp: bool = False
    phone: bool = False

    @property
    def any_selected(self) -> bool:
        """Return True if at least one channel is selected."""
        return self.email or self.whatsapp or self.phone

    def labels(self) -> list[str]:
        """Return display labels for the selected channels, in fixed order."""
        out: list[str] = []
        if self.email:
            out.append("Email")
        if self.whatsapp:
            out.append("WhatsApp")
        if self.phone:
            out.append("Llamada")
        return out


@dataclass(frozen=True, slots=True)
class QuoteLineItem(BaseEntity):
    """One requested product within a quote.

    Args:
        product_id: Weak reference to a catalog product (identifier only).
        product_name: Display name resolved at submission time and frozen.
        quantity: Requested quantity (strictly positive).
        frequency: Expected purchase frequency.
        presentation_id: Optional weak reference to a catalog presentation.
        presentation_label: Optional free-text or resolved presentation label.

    Raises:
        ValueError: If quantity is not positive or identifiers are blank.
    """

    product_id: str
    product_name: str
    quantity: int
    frequency: PurchaseFrequency
    presentation_id: str | None = None
    presentation_label: str | None = None

    def __post_init__(self) -> None:
        require_text(self.product_id, "product_id")
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")


@dataclass(frozen=True, slots=True)
class Quote(BaseEntity):
    """Quote request entity.

    The identifier and ``created_at`` never change. Product names on the
    line items are denormalized at creation and are not refreshed.

    Raises:
        ValueError: If required client fields are blank.
    """

    id: UUID
    client_type: ClientType
    first_name: str
    last_name: str
    dni: str
    phone: str
    email: str
    created_at: datetime
    updated_at: datetime
    products: tuple[QuoteLineItem, ...] = ()
    contact_preferences: ContactPreferences = field(default_factory=ContactPreferences)
    observations: str = ""
    company_name: str | None = None
    ruc: str | None = None
    status: QuoteStatus = QuoteStatus.PENDING
    source: str = DEFAULT_SOURCE
    ip_address: str | None = None
    user_agent: str | None = None

    def __post_init__(self) -> None:
        for name in ("first_name", "last_name", "dni", "phone", "email"):
            require_text(getattr(self, name), name)
        if self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=UTC))
        if self.updated_at.tzinfo is None:
            object.__setattr__(self, "updated_at", self.updated_at.replace(tzinfo=UTC))

    @property
    def client_name(self) -> str:
        """Return "first last"."""
        return f"{self.first_name} {self.last_name}"

    def with_status(self, status: QuoteStatus, *, at: datetime) -> Quote:
        """Return a copy with a new status and touched ``updated_at``."""
        return replace(self, status=status, updated_at=at)
