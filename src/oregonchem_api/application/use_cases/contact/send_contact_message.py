# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Use Case: Send Contact Message

Purpose:
    Validate a contact-form message and hand it to the contact notifier.
    Unlike quote notifications, delivery failures are surfaced to the caller:
    there is no stored record to fall back on.

Layer: application/use_cases
"""

from __future__ import annotations

from oregonchem_api.application.schemas.dto.contact import ContactMessageDTO
from oregonchem_api.domain.entities.contact_message import ContactMessage
from oregonchem_api.domain.exceptions.quotes import QuoteValidationError
from oregonchem_api.domain.interfaces.gateways.notifier import ContactNotifier

_REQUIRED = ("name", "email", "message")


class SendContactMessageUseCase:
    """Send the company and client mails for a contact-form message.

    Raises:
        QuoteValidationError: If name, email or message is missing.
        NotificationDispatchError: If a mail could not be sent.
    """

    def __init__(self, notifier: ContactNotifier) -> None:
        self._notifier = notifier

    async def execute(self, payload: ContactMessageDTO) -> ContactMessage:
        missing = [f for f in _REQUIRED if not (getattr(payload, f) or "").strip()]
        if missing:
            raise QuoteValidationError("Missing required fields", details={"missing": missing})

        message = ContactMessage(
            name=payload.name or "",
            email=payload.email or "",
            message=payload.message or "",
            phone=payload.phone or None,
        )
        await self._notifier.dispatch_contact(message)
        return message
