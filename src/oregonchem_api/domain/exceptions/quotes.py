# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote Domain Exceptions

Purpose:
    Error conditions raised along the quote pipeline and the notification
    path. Routers map them to HTTP; best-effort stages catch them and record
    the failure in the pipeline outcome instead.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class QuoteValidationError(DomainError):
    """Submission or update payload violates a business rule."""

    code = "VALIDATION_ERROR"


class InvalidQuoteStatus(QuoteValidationError):
    """Requested status is outside the four-value enumeration."""

    code = "INVALID_STATUS"


class QuoteNotFound(DomainError):
    """No quote exists for the given identifier."""

    code = "QUOTE_NOT_FOUND"


class QuotePersistenceError(DomainError):
    """The quote store rejected or failed a write."""

    code = "PERSISTENCE_ERROR"


class CatalogLookupError(DomainError):
    """The catalog store failed while resolving a product or presentation."""

    code = "CATALOG_LOOKUP_ERROR"


class DocumentRenderError(DomainError):
    """PDF generation failed."""

    code = "DOCUMENT_RENDER_ERROR"


class MailTransportError(DomainError):
    """The outbound mail transport failed (auth, network, quota)."""

    code = "MAIL_TRANSPORT_ERROR"


class NotificationDispatchError(DomainError):
    """One or more notification mails could not be rendered or sent."""

    code = "NOTIFICATION_DISPATCH_ERROR"
