# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote Enumerations

Purpose:
    Closed vocabularies for quote records: client type, purchase frequency and
    processing status, plus the Spanish display labels used on documents.

Layer: domain/enums

Notes:
    Wire values are the storefront's Spanish slugs. English aliases are
    accepted on input and normalized to the canonical member.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class _AliasedEnum(str, Enum):
    """String enum that resolves a small alias table before failing."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value: object) -> _AliasedEnum | None:
        if isinstance(value, str):
            key = value.strip().lower()
            canonical = cls._aliases().get(key, key)
            for member in cls:
                if member.value == canonical:
                    return member
        return None


class ClientType(_AliasedEnum):
    """Kind of customer submitting the quote."""

    INDIVIDUAL = "natural"
    COMPANY = "empresa"
    INDIVIDUAL_WITH_COMPANY = "natural-empresa"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {
            "individual": "natural",
            "company": "empresa",
            "individual-with-company": "natural-empresa",
        }

    @property
    def label(self) -> str:
        """Spanish display label."""
        return CLIENT_TYPE_LABELS[self]

    @property
    def has_company(self) -> bool:
        """Return True when the client type implies a company block."""
        return self is not ClientType.INDIVIDUAL


class PurchaseFrequency(_AliasedEnum):
    """How often the customer expects to buy the requested item."""

    ONCE = "unica"
    BIWEEKLY = "quincenal"
    MONTHLY = "mensual"
    BIMONTHLY = "bimestral"
    QUARTERLY = "trimestral"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {
            "once": "unica",
            "única": "unica",
            "biweekly": "quincenal",
            "monthly": "mensual",
            "bimonthly": "bimestral",
            "quarterly": "trimestral",
        }

    @property
    def label(self) -> str:
        """Spanish display label."""
        return FREQUENCY_LABELS[self]


class QuoteStatus(str, Enum):
    """Processing status of a quote. Any status may move to any other."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


CLIENT_TYPE_LABELS: Final[dict[ClientType, str]] = {
    ClientType.INDIVIDUAL: "Persona Natural",
    ClientType.COMPANY: "Empresa",
    ClientType.INDIVIDUAL_WITH_COMPANY: "Persona con Empresa",
}

FREQUENCY_LABELS: Final[dict[PurchaseFrequency, str]] = {
    PurchaseFrequency.ONCE: "Única compra",
    PurchaseFrequency.BIWEEKLY: "Quincenal",
    PurchaseFrequency.MONTHLY: "Mensual",
    PurchaseFrequency.BIMONTHLY: "Bimestral",
    PurchaseFrequency.QUARTERLY: "Trimestral",
}

__all__ = [
    "CLIENT_TYPE_LABELS",
    "FREQUENCY_LABELS",
    "ClientType",
    "PurchaseFrequency",
    "QuoteStatus",
]
