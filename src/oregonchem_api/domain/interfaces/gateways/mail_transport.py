# src/oregonchem_api/domain/interfaces/gateways/mail_transport.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Mail Transport Protocol.

Synopsis:
    Vendor-neutral description of an outbound e-mail and the protocol that
    delivers it. The SMTP implementation lives in adapters/gateways; tests use
    in-memory fakes.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class MailAttachment:
    """Binary attachment.

    Attributes:
        filename: File name shown to the recipient.
        content: Raw bytes.
        mime_type: ``maintype/subtype`` string.
        content_id: When set, the part is attached inline and referenced from
            the HTML body as ``cid:<content_id>``.
    """

    filename: str
    content: bytes
    mime_type: str
    content_id: str | None = None

    @property
    def inline(self) -> bool:
        """Return True for parts referenced from the HTML body."""
        return self.content_id is not None


@dataclass(frozen=True, slots=True)
class OutboundMail:
    """A fully rendered message ready for delivery."""

    sender: str
    sender_name: str
    to: str
    subject: str
    html: str
    attachments: Sequence[MailAttachment] = field(default_factory=tuple)
    reply_to: str | None = None


class MailTransport(Protocol):
    """Deliver rendered messages.

    Implementations raise
    :class:`~oregonchem_api.domain.exceptions.quotes.MailTransportError` on
    auth, network or quota failures. No retries are performed.
    """

    async def send(self, mail: OutboundMail) -> None:
        """Deliver ``mail``."""
        ...
