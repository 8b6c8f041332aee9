# src/oregonchem_api/domain/interfaces/gateways/notifier.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Notifier Protocols.

Each dispatch sends two mails (company and client). Both are attempted; a
failure of either surfaces once as ``NotificationDispatchError``.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from oregonchem_api.domain.entities.contact_message import ContactMessage
from oregonchem_api.domain.entities.quote import Quote


@runtime_checkable
class QuoteNotifier(Protocol):
    """Company notification and client confirmation for a quote."""

    async def dispatch(self, quote: Quote, pdf: bytes | None) -> None: ...


@runtime_checkable
class ContactNotifier(Protocol):
    """Company notification and client confirmation for a contact message."""

    async def dispatch_contact(self, message: ContactMessage) -> None: ...
