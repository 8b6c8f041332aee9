# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Contact Message Entity

Purpose:
    A message left through the storefront contact form. Never persisted;
    it only feeds the contact notification mails.

Layer: domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import BaseEntity, require_text


@dataclass(frozen=True, slots=True)
class ContactMessage(BaseEntity):
    """Contact-form message.

    Raises:
        ValueError: If name, email or message are blank.
    """

    name: str
    email: str
    message: str
    phone: str | None = None

    def __post_init__(self) -> None:
        require_text(self.name, "name")
        require_text(self.email, "email")
        require_text(self.message, "message")
