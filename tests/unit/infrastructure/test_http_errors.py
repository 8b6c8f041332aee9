from __future__ import annotations

import pytest

from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.domain.exceptions.quotes import (
    DocumentRenderError,
    InvalidQuoteStatus,
    NotificationDispatchError,
    QuoteNotFound,
    QuotePersistenceError,
    QuoteValidationError,
)
from oregonchem_api.infrastructure.http.errors import (
    INTERNAL_MESSAGE,
    PERSISTENCE_MESSAGE,
    domain_error_message,
    domain_error_status,
    error_envelope,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (QuoteNotFound("no existe"), 404),
        (QuoteValidationError("Datos inválidos"), 400),
        (InvalidQuoteStatus("Estado inválido"), 400),
        (QuotePersistenceError("db down"), 500),
        (NotificationDispatchError("smtp"), 500),
        (DocumentRenderError("pdf"), 500),
        (DomainError("generic"), 500),
    ],
)
def test_domain_error_status(exc: DomainError, expected: int) -> None:
    assert domain_error_status(exc) == expected


def test_domain_error_messages() -> None:
    assert domain_error_message(QuoteNotFound("Cotización no encontrada")) == "Cotización no encontrada"
    assert domain_error_message(QuotePersistenceError("db down")) == PERSISTENCE_MESSAGE
    assert domain_error_message(NotificationDispatchError("smtp")) == INTERNAL_MESSAGE


def test_error_envelope_omits_unset_fields() -> None:
    assert error_envelope(message="x") == {"success": False, "message": "x"}
    assert error_envelope(message="x", code="C", trace_id="t") == {
        "success": False,
        "message": "x",
        "code": "C",
        "trace_id": "t",
    }
