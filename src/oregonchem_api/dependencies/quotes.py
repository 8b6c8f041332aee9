# src/oregonchem_api/dependencies/quotes.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Dependency wiring for quotes and contact messages.

Overview:
    FastAPI dependency providers that assemble the quote and contact
    controllers from settings and shared infrastructure.

Layer:
    dependencies

Design:
    * Every collaborator has its own provider so tests can override exactly
      one seam (`app.dependency_overrides[get_mail_transport] = ...`).
    * The unit of work and catalog lookup share the process-wide
      sessionmaker; the remote logo fetch reuses the app's httpx client.
    * The Jinja2 environment is built once per process; templates are
      compiled on first use and cached by Jinja2.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from jinja2 import Environment

from oregonchem_api.adapters.controllers.contact_controller import ContactController
from oregonchem_api.adapters.controllers.quotes_controller import QuotesController
from oregonchem_api.adapters.gateways.logo_provider import ChainedLogoProvider
from oregonchem_api.adapters.gateways.mail_notification_dispatcher import (
    MailNotificationDispatcher,
)
from oregonchem_api.adapters.gateways.pdf_quote_renderer import PdfQuoteRenderer
from oregonchem_api.adapters.gateways.smtp_mail_transport import SmtpMailTransport
from oregonchem_api.adapters.repositories.catalog_repository import SqlAlchemyCatalogLookup
from oregonchem_api.adapters.uow import SqlAlchemyUnitOfWork
from oregonchem_api.application.services.company import CompanyIdentity
from oregonchem_api.application.services.recipient_policy import RecipientPolicy
from oregonchem_api.application.uow import UnitOfWork
from oregonchem_api.application.use_cases.contact.send_contact_message import (
    SendContactMessageUseCase,
)
from oregonchem_api.application.use_cases.quotes.get_quote import GetQuoteUseCase
from oregonchem_api.application.use_cases.quotes.list_quotes import ListQuotesUseCase
from oregonchem_api.application.use_cases.quotes.submit_quote import SubmitQuoteUseCase
from oregonchem_api.application.use_cases.quotes.update_quote_status import (
    UpdateQuoteStatusUseCase,
)
from oregonchem_api.config.settings import Settings
from oregonchem_api.config.settings import get_settings as core_get_settings
from oregonchem_api.domain.interfaces.gateways.document_renderer import DocumentRenderer
from oregonchem_api.domain.interfaces.gateways.logo_provider import LogoProvider
from oregonchem_api.domain.interfaces.gateways.mail_transport import MailTransport
from oregonchem_api.domain.interfaces.repositories.catalog_lookup import CatalogLookup
from oregonchem_api.infrastructure.database.session import get_sessionmaker
from oregonchem_api.infrastructure.mail.templating import build_template_environment


def get_settings() -> Settings:
    """Settings provider (overridable in tests)."""
    return core_get_settings()


@lru_cache(maxsize=1)
def _template_environment() -> Environment:
    return build_template_environment()


SettingsDep = Annotated[Settings, Depends(get_settings)]


# -----------------------------------------------------------------------------
# Infrastructure seams
# -----------------------------------------------------------------------------


def get_quote_uow() -> UnitOfWork:
    """Return a fresh SQLAlchemy unit of work."""
    return SqlAlchemyUnitOfWork(session_factory=get_sessionmaker())


def get_catalog_lookup() -> CatalogLookup:
    return SqlAlchemyCatalogLookup(get_sessionmaker())


def get_logo_provider(request: Request, settings: SettingsDep) -> LogoProvider:
    return ChainedLogoProvider(
        local_path=settings.company_logo_path,
        remote_url=settings.company_logo_url,
        fallback_path=settings.company_logo_fallback_path,
        http_client=getattr(request.app.state, "http_client", None),
        timeout_s=settings.logo_fetch_timeout_s,
    )


def get_document_renderer(
    settings: SettingsDep,
    logo: Annotated[LogoProvider, Depends(get_logo_provider)],
) -> DocumentRenderer:
    return PdfQuoteRenderer(CompanyIdentity.from_settings(settings), logo_provider=logo)


def get_mail_transport(settings: SettingsDep) -> MailTransport:
    password = settings.smtp_password.get_secret_value() if settings.smtp_password else None
    return SmtpMailTransport(
        host=settings.smtp_host,
        port=settings.smtp_port,
        secure=settings.smtp_secure,
        username=settings.smtp_user,
        password=password,
        timeout_s=settings.smtp_timeout_s,
    )


def get_notifier(
    settings: SettingsDep,
    transport: Annotated[MailTransport, Depends(get_mail_transport)],
    logo: Annotated[LogoProvider, Depends(get_logo_provider)],
) -> MailNotificationDispatcher:
    return MailNotificationDispatcher(
        transport=transport,
        sender=settings.mail_from,
        company=CompanyIdentity.from_settings(settings),
        recipients=RecipientPolicy.from_settings(settings),
        logo_provider=logo,
        templates=_template_environment(),
    )


# -----------------------------------------------------------------------------
# Controllers
# -----------------------------------------------------------------------------


def get_quotes_controller(
    settings: SettingsDep,
    uow: Annotated[UnitOfWork, Depends(get_quote_uow)],
    catalog: Annotated[CatalogLookup, Depends(get_catalog_lookup)],
    renderer: Annotated[DocumentRenderer, Depends(get_document_renderer)],
    notifier: Annotated[MailNotificationDispatcher, Depends(get_notifier)],
) -> QuotesController:
    """Build the quotes controller for one request."""
    return QuotesController(
        submit=SubmitQuoteUseCase(
            uow=uow,
            catalog=catalog,
            renderer=renderer,
            notifier=notifier,
            require_products=settings.quote_require_products,
            unknown_product_name=settings.quote_unknown_product_name,
        ),
        get=GetQuoteUseCase(uow),
        list_=ListQuotesUseCase(uow),
        update_status=UpdateQuoteStatusUseCase(uow),
    )


def get_contact_controller(
    notifier: Annotated[MailNotificationDispatcher, Depends(get_notifier)],
) -> ContactController:
    return ContactController(SendContactMessageUseCase(notifier))
