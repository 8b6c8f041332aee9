# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Recipient Policy

Purpose:
    Decide who receives each notification. Every method evaluates the rules
    afresh on each call:

        1. The global redirect address wins when it is allowed: always outside
           production, and in production only with the explicit opt-in flag.
        2. Otherwise the per-audience override applies.
        3. Otherwise company mail goes to the company inbox and client mail
           goes to the address the customer typed.

Layer: application/services
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oregonchem_api.infrastructure.logging.logger import get_json_logger

if TYPE_CHECKING:
    from oregonchem_api.config.settings import Settings

logger = get_json_logger(__name__)

DEFAULT_COMPANY_INBOX = "contacto@quimicaindustrial.pe"


@dataclass(frozen=True, slots=True)
class RecipientPolicy:
    """Recipient resolution rules for quote and contact notifications."""

    is_production: bool = False
    redirect_all_to: str | None = None
    allow_redirect_in_prod: bool = False
    company_inbox: str = DEFAULT_COMPANY_INBOX
    quote_company_to: str | None = None
    quote_client_to: str | None = None
    contact_company_to: str | None = None
    contact_client_to: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> RecipientPolicy:
        return cls(
            is_production=settings.is_production,
            redirect_all_to=settings.email_redirect_all_to,
            allow_redirect_in_prod=settings.allow_email_redirect_in_prod,
            company_inbox=settings.company_email or DEFAULT_COMPANY_INBOX,
            quote_company_to=settings.quote_company_to,
            quote_client_to=settings.quote_client_to,
            contact_company_to=settings.contact_company_to,
            contact_client_to=settings.contact_client_to,
        )

    def redirect_target(self) -> str | None:
        """Return the active global redirect address, if any."""
        target = (self.redirect_all_to or "").strip()
        if not target:
            return None
        if self.is_production and not self.allow_redirect_in_prod:
            logger.warning("mail_redirect_ignored_in_production", extra={"extra": {}})
            return None
        return target

    def quote_company(self) -> str:
        return self._resolve(self.quote_company_to, self.company_inbox)

    def quote_client(self, client_email: str) -> str:
        return self._resolve(self.quote_client_to, client_email)

    def contact_company(self) -> str:
        return self._resolve(self.contact_company_to, self.company_inbox)

    def contact_client(self, client_email: str) -> str:
        return self._resolve(self.contact_client_to, client_email)

    def _resolve(self, override: str | None, fallback: str) -> str:
        return self.redirect_target() or (override or "").strip() or fallback
