# tests/fakes.py
"""In-memory fakes for the quote pipeline seams, plus payload builders."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from oregonchem_api.domain.entities.contact_message import ContactMessage
from oregonchem_api.domain.entities.quote import ContactPreferences, Quote, QuoteLineItem
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus
from oregonchem_api.domain.exceptions.quotes import (
    CatalogLookupError,
    DocumentRenderError,
    MailTransportError,
    NotificationDispatchError,
)
from oregonchem_api.domain.interfaces.gateways.mail_transport import OutboundMail

FAKE_PDF = b"%PDF-1.4 fake"


class FakeQuoteRepository:
    """In-memory quote store honoring the repository contract."""

    def __init__(self) -> None:
        self.rows: dict[UUID, Quote] = {}

    async def add(self, quote: Quote) -> Quote:
        self.rows[quote.id] = quote
        return quote

    async def get(self, quote_id: UUID) -> Quote | None:
        return self.rows.get(quote_id)

    async def list(
        self,
        *,
        status: QuoteStatus | None,
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Quote], int]:
        rows = [q for q in self.rows.values() if status is None or q.status is status]
        rows.sort(key=lambda q: q.created_at, reverse=True)
        return rows[offset : offset + limit], len(rows)

    async def update_status(
        self,
        quote_id: UUID,
        status: QuoteStatus,
        *,
        updated_at: datetime,
    ) -> Quote | None:
        current = self.rows.get(quote_id)
        if current is None:
            return None
        updated = current.with_status(status, at=updated_at)
        self.rows[quote_id] = updated
        return updated


class FakeUnitOfWork:
    """Unit of work around a :class:`FakeQuoteRepository`.

    ``fail_with`` makes every repository lookup raise, which is how tests
    simulate a broken quote store.
    """

    def __init__(
        self,
        repo: FakeQuoteRepository | None = None,
        *,
        fail_with: Exception | None = None,
    ) -> None:
        self.repo = repo or FakeQuoteRepository()
        self.fail_with = fail_with
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> FakeUnitOfWork:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    def get_repository(self, repo_type: type[Any]) -> Any:
        if self.fail_with is not None:
            raise self.fail_with
        return self.repo


class FakeCatalog:
    """Catalog lookup over two dictionaries."""

    def __init__(
        self,
        products: dict[str, str] | None = None,
        presentations: dict[str, str] | None = None,
        *,
        broken: bool = False,
    ) -> None:
        self.products = products or {}
        self.presentations = presentations or {}
        self.broken = broken
        self.product_calls: list[str] = []

    async def get_product_name(self, product_id: str) -> str | None:
        self.product_calls.append(product_id)
        if self.broken:
            raise CatalogLookupError("catalog down")
        return self.products.get(product_id)

    async def get_presentation_label(self, presentation_id: str) -> str | None:
        if self.broken:
            raise CatalogLookupError("catalog down")
        return self.presentations.get(presentation_id)


class FakeRenderer:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.rendered: list[Quote] = []

    async def render(self, quote: Quote) -> bytes:
        self.rendered.append(quote)
        if self.fail:
            raise DocumentRenderError("boom")
        return FAKE_PDF


class FakeNotifier:
    """Records quote and contact dispatches; optionally fails them."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.quotes: list[tuple[Quote, bytes | None]] = []
        self.contacts: list[ContactMessage] = []

    async def dispatch(self, quote: Quote, pdf: bytes | None) -> None:
        self.quotes.append((quote, pdf))
        if self.fail:
            raise NotificationDispatchError("smtp down", details={"failed": {"company": "x"}})

    async def dispatch_contact(self, message: ContactMessage) -> None:
        self.contacts.append(message)
        if self.fail:
            raise NotificationDispatchError("smtp down", details={"failed": {"company": "x"}})


class FakeMailTransport:
    """Collects outbound mail; recipients listed in ``fail_for`` raise."""

    def __init__(self, *, fail_for: set[str] | None = None) -> None:
        self.fail_for = fail_for or set()
        self.sent: list[OutboundMail] = []
        self.attempted: list[OutboundMail] = []

    async def send(self, mail: OutboundMail) -> None:
        self.attempted.append(mail)
        if mail.to in self.fail_for:
            raise MailTransportError("rejected", details={"to": mail.to})
        self.sent.append(mail)


# -----------------------------------------------------------------------------
# Builders
# -----------------------------------------------------------------------------


def build_quote(**overrides: Any) -> Quote:
    """Return a valid quote; any field may be overridden."""
    now = datetime(2025, 3, 14, 15, 30, tzinfo=UTC)
    fields: dict[str, Any] = {
        "id": uuid4(),
        "client_type": ClientType.INDIVIDUAL,
        "first_name": "Ana",
        "last_name": "Quispe",
        "dni": "45678912",
        "phone": "+51 987 654 321",
        "email": "ana@example.pe",
        "created_at": now,
        "updated_at": now,
        "products": (
            QuoteLineItem(
                product_id=str(uuid4()),
                product_name="Soda Cáustica",
                quantity=4,
                frequency=PurchaseFrequency.MONTHLY,
                presentation_label="Bolsa 25 kg",
            ),
        ),
        "contact_preferences": ContactPreferences(email=True, whatsapp=True),
        "observations": "",
    }
    fields.update(overrides)
    return Quote(**fields)


def submission_payload(**overrides: Any) -> dict[str, Any]:
    """Return a storefront-style camelCase quote body."""
    body: dict[str, Any] = {
        "clientType": "natural",
        "firstName": "Ana",
        "lastName": "Quispe",
        "dni": "45678912",
        "phone": "+51 987 654 321",
        "email": "ana@example.pe",
        "products": [
            {
                "productId": "prod-1",
                "presentationLabel": "Bolsa 25 kg",
                "quantity": 4,
                "frequency": "mensual",
            }
        ],
        "contactPreferences": {"email": True, "whatsapp": False, "phone": True},
        "observations": "Entrega en Callao.\nHorario de mañana.",
    }
    body.update(overrides)
    return body
