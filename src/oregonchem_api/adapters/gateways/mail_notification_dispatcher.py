# src/oregonchem_api/adapters/gateways/mail_notification_dispatcher.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Mail Notification Dispatcher

Purpose:
    Render and send the two mails that follow a quote submission (company
    notification and client confirmation) and the two that follow a
    contact-form message.

Behavior:
    * Templates are compiled once per dispatcher instance.
    * Recipients are resolved through :class:`RecipientPolicy` on every send.
    * The logo is resolved per dispatch. When bytes are available it is
      attached inline and referenced as ``cid:``; otherwise the templates
      point at the configured remote URL.
    * Both audiences are always attempted. If either fails, a single
      :class:`NotificationDispatchError` names the failed audiences.

Layer: adapters/gateways
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from jinja2 import Environment
from markupsafe import Markup

from oregonchem_api.application.services.company import CompanyIdentity
from oregonchem_api.application.services.recipient_policy import RecipientPolicy
from oregonchem_api.domain.entities.contact_message import ContactMessage
from oregonchem_api.domain.entities.quote import Quote
from oregonchem_api.domain.exceptions.quotes import NotificationDispatchError
from oregonchem_api.domain.interfaces.gateways.logo_provider import LogoAsset, LogoProvider
from oregonchem_api.domain.interfaces.gateways.mail_transport import (
    MailAttachment,
    MailTransport,
    OutboundMail,
)
from oregonchem_api.infrastructure.logging.logger import get_json_logger
from oregonchem_api.infrastructure.mail.templating import build_template_environment
from oregonchem_api.infrastructure.observability.metrics import get_mail_send_total

logger = get_json_logger(__name__)

QUOTE_COMPANY_SUBJECT = "Nueva Cotización - {first_name} {last_name}"
QUOTE_CLIENT_SUBJECT = "Confirmación de Cotización - {company}"
CONTACT_COMPANY_SUBJECT = "Nuevo mensaje de contacto - {name}"
CONTACT_CLIENT_SUBJECT = "Confirmación de contacto - {company}"


def pdf_filename(quote: Quote) -> str:
    """Attachment name for a quote's PDF."""
    return f"cotizacion-{quote.id}.pdf"


class MailNotificationDispatcher:
    """Quote and contact notifier backed by a :class:`MailTransport`.

    Args:
        transport: Delivery mechanism.
        sender: Envelope ``From`` address.
        company: Identity used in templates and as the sender name.
        recipients: Recipient resolution rules.
        logo_provider: Optional logo source for inline images.
        templates: Jinja2 environment; the bundled templates by default.
    """

    def __init__(
        self,
        *,
        transport: MailTransport,
        sender: str,
        company: CompanyIdentity,
        recipients: RecipientPolicy,
        logo_provider: LogoProvider | None = None,
        templates: Environment | None = None,
    ) -> None:
        self._transport = transport
        self._sender = sender
        self._company = company
        self._recipients = recipients
        self._logo_provider = logo_provider

        env = templates or build_template_environment()
        self._line_items_tpl = env.get_template("_line_items.html")
        self._quote_company_tpl = env.get_template("quote_company.html")
        self._quote_client_tpl = env.get_template("quote_client.html")
        self._contact_company_tpl = env.get_template("contact_company.html")
        self._contact_client_tpl = env.get_template("contact_client.html")

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    async def dispatch(self, quote: Quote, pdf: bytes | None) -> None:
        logo = await self._resolve_logo()
        context = {
            "company": self._company,
            "quote": quote,
            "logo_src": self._logo_src(logo),
            "items_html": Markup(self._line_items_tpl.render(items=quote.products)),
            "contact_methods": ", ".join(quote.contact_preferences.labels()),
            "observations": quote.observations,
        }
        logo_parts = self._logo_parts(logo)
        company_parts = list(logo_parts)
        if pdf is not None:
            company_parts.append(
                MailAttachment(
                    filename=pdf_filename(quote),
                    content=pdf,
                    mime_type="application/pdf",
                )
            )

        async def _company() -> None:
            await self._transport.send(
                OutboundMail(
                    sender=self._sender,
                    sender_name=self._company.name,
                    to=self._recipients.quote_company(),
                    subject=QUOTE_COMPANY_SUBJECT.format(
                        first_name=quote.first_name, last_name=quote.last_name
                    ),
                    html=self._quote_company_tpl.render(**context),
                    attachments=tuple(company_parts),
                    reply_to=quote.email,
                )
            )

        async def _client() -> None:
            await self._transport.send(
                OutboundMail(
                    sender=self._sender,
                    sender_name=self._company.name,
                    to=self._recipients.quote_client(quote.email),
                    subject=QUOTE_CLIENT_SUBJECT.format(company=self._company.name),
                    html=self._quote_client_tpl.render(**context),
                    attachments=logo_parts,
                )
            )

        await self._send_all(
            "quote",
            {"company": _company, "client": _client},
            log_extra={"quote_id": str(quote.id)},
        )

    # ------------------------------------------------------------------
    # Contact form
    # ------------------------------------------------------------------

    async def dispatch_contact(self, message: ContactMessage) -> None:
        logo = await self._resolve_logo()
        context = {
            "company": self._company,
            "message": message,
            "logo_src": self._logo_src(logo),
        }
        logo_parts = self._logo_parts(logo)

        async def _company() -> None:
            await self._transport.send(
                OutboundMail(
                    sender=self._sender,
                    sender_name=self._company.name,
                    to=self._recipients.contact_company(),
                    subject=CONTACT_COMPANY_SUBJECT.format(name=message.name),
                    html=self._contact_company_tpl.render(**context),
                    attachments=logo_parts,
                    reply_to=message.email,
                )
            )

        async def _client() -> None:
            await self._transport.send(
                OutboundMail(
                    sender=self._sender,
                    sender_name=self._company.name,
                    to=self._recipients.contact_client(message.email),
                    subject=CONTACT_CLIENT_SUBJECT.format(company=self._company.name),
                    html=self._contact_client_tpl.render(**context),
                    attachments=logo_parts,
                )
            )

        await self._send_all(
            "contact",
            {"company": _company, "client": _client},
            log_extra={"sender": message.email},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _send_all(
        self,
        kind: str,
        sends: dict[str, Callable[[], Awaitable[None]]],
        *,
        log_extra: dict[str, str],
    ) -> None:
        counter = get_mail_send_total()
        failures: dict[str, str] = {}
        for audience, send in sends.items():
            label = f"{kind}_{audience}"
            try:
                await send()
            except Exception as exc:
                failures[audience] = str(exc) or type(exc).__name__
                counter.labels(audience=label, result="failure").inc()
                logger.warning(
                    "mail_send_failed",
                    extra={"extra": {**log_extra, "audience": label, "error": failures[audience]}},
                )
                continue
            counter.labels(audience=label, result="success").inc()
            logger.info("mail_sent", extra={"extra": {**log_extra, "audience": label}})

        if failures:
            raise NotificationDispatchError(
                f"Fallo el envío de correo: {', '.join(failures)}",
                details={"kind": kind, "failed": failures},
            )

    async def _resolve_logo(self) -> LogoAsset | None:
        if self._logo_provider is None:
            return None
        return await self._logo_provider.resolve()

    def _logo_src(self, logo: LogoAsset | None) -> str:
        return f"cid:{logo.content_id}" if logo is not None else self._company.logo_url

    @staticmethod
    def _logo_parts(logo: LogoAsset | None) -> tuple[MailAttachment, ...]:
        if logo is None:
            return ()
        return (
            MailAttachment(
                filename=logo.filename,
                content=logo.content,
                mime_type=logo.mime_type,
                content_id=logo.content_id,
            ),
        )
