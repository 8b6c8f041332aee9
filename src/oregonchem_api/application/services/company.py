# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Company identity shared by the PDF letterhead and the mail templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oregonchem_api.config.settings import Settings


@dataclass(frozen=True, slots=True)
class CompanyIdentity:
    """Static company contact block.

    Attributes:
        name: Display name; also the sender name on outbound mail.
        address: Postal address.
        phone: Phone number.
        email: Public contact e-mail.
        logo_url: Remote logo, referenced from mail when no logo bytes resolve.
    """

    name: str = "Química Industrial Perú"
    address: str = "Av. Industrial 123, Lima, Perú"
    phone: str = "+51 1 123 4567"
    email: str = "contacto@quimicaindustrial.pe"
    logo_url: str = "https://quimicaindustrial.pe/logo.png"

    @classmethod
    def from_settings(cls, settings: Settings) -> CompanyIdentity:
        return cls(
            name=settings.company_name,
            address=settings.company_address,
            phone=settings.company_phone,
            email=settings.company_email,
            logo_url=settings.company_logo_url,
        )
