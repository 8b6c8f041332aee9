# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Contact Controller: forwards contact-form messages to the use case."""
from __future__ import annotations

from oregonchem_api.application.schemas.dto.contact import ContactMessageDTO
from oregonchem_api.application.use_cases.contact.send_contact_message import (
    SendContactMessageUseCase,
)


class ContactController:
    """Controller for ``POST /contact``."""

    __slots__ = ("_send",)

    def __init__(self, send: SendContactMessageUseCase) -> None:
        self._send = send

    async def send(self, payload: ContactMessageDTO) -> None:
        await self._send.execute(payload)
