# src/oregonchem_api/adapters/gateways/smtp_mail_transport.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
SMTP Mail Transport

Purpose:
    Deliver :class:`OutboundMail` over SMTP. The message is assembled with
    ``email.message.EmailMessage``:

        multipart/mixed
          multipart/alternative
            text/plain
            multipart/related
              text/html
              image/*        (inline parts, referenced as cid:...)
          application/pdf  (regular attachments)

    ``smtplib`` is blocking, so each send runs in a worker thread. One
    connection is opened per message; nothing is retried.

Layer: adapters/gateways
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

from oregonchem_api.domain.exceptions.quotes import MailTransportError
from oregonchem_api.domain.interfaces.gateways.mail_transport import OutboundMail
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

PLAIN_TEXT_FALLBACK = "Este mensaje requiere un cliente de correo compatible con HTML."


def build_message(mail: OutboundMail) -> EmailMessage:
    """Return the MIME message for ``mail``."""
    msg = EmailMessage()
    msg["From"] = formataddr((mail.sender_name, mail.sender))
    msg["To"] = mail.to
    msg["Subject"] = mail.subject
    msg["Message-ID"] = make_msgid(domain=mail.sender.partition("@")[2] or None)
    if mail.reply_to:
        msg["Reply-To"] = mail.reply_to

    msg.set_content(PLAIN_TEXT_FALLBACK)
    msg.add_alternative(mail.html, subtype="html")
    html_part = msg.get_payload()[-1]

    for att in mail.attachments:
        maintype, _, subtype = att.mime_type.partition("/")
        if att.inline:
            html_part.add_related(
                att.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                cid=f"<{att.content_id}>",
                filename=att.filename,
                disposition="inline",
            )
        else:
            msg.add_attachment(
                att.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=att.filename,
            )
    return msg


class SmtpMailTransport:
    """Send messages with ``smtplib``.

    Args:
        host: SMTP server host.
        port: SMTP server port.
        secure: Use implicit TLS (``SMTP_SSL``); otherwise STARTTLS is
            attempted when the server advertises it.
        username: Optional login user.
        password: Optional login password.
        timeout_s: Socket timeout.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        secure: bool = False,
        username: str | None = None,
        password: str | None = None,
        timeout_s: float = 30.0,
    ) -> None:
        self._host = host
        self._port = port
        self._secure = secure
        self._username = username
        self._password = password
        self._timeout_s = timeout_s

    async def send(self, mail: OutboundMail) -> None:
        msg = build_message(mail)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning(
                "smtp_send_failed",
                extra={"extra": {"to": mail.to, "subject": mail.subject, "error": str(exc)}},
            )
            raise MailTransportError(
                "No se pudo enviar el correo",
                details={"to": mail.to, "error": str(exc)},
            ) from exc
        logger.info("smtp_sent", extra={"extra": {"to": mail.to, "subject": mail.subject}})

    def _deliver(self, msg: EmailMessage) -> None:
        context = ssl.create_default_context()
        server: smtplib.SMTP
        if self._secure:
            server = smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout_s, context=context
            )
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout_s)
        with server:
            if not self._secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(msg)
