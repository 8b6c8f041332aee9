from __future__ import annotations

import pytest
from fakes import submission_payload
from pydantic import ValidationError
from starlette.requests import Request

from oregonchem_api.adapters.mappers.quote_submission_mapper import (
    to_provenance_dto,
    to_submission_dto,
)
from oregonchem_api.adapters.schemas.http.quotes import QuoteSubmissionRequest
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency


def _request(headers: dict[str, str], client: tuple[str, int] | None = ("9.9.9.9", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/quotes",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


def test_camel_case_payload_maps_to_dto() -> None:
    payload = QuoteSubmissionRequest.model_validate(
        submission_payload(clientType="company", companyName=" ACME ", ruc="")
    )

    dto = to_submission_dto(payload)

    assert dto.client_type is ClientType.COMPANY
    assert dto.company_name == "ACME"
    assert dto.ruc is None
    assert dto.products[0].frequency is PurchaseFrequency.MONTHLY
    assert dto.products[0].presentation_label == "Bolsa 25 kg"
    assert dto.contact_preferences.phone is True
    assert dto.source == "website"


def test_comments_used_only_when_observations_empty() -> None:
    legacy = QuoteSubmissionRequest.model_validate(
        submission_payload(observations=None, comments="Línea 1\nLínea 2")
    )
    both = QuoteSubmissionRequest.model_validate(
        submission_payload(observations="Gana", comments="Pierde")
    )

    assert to_submission_dto(legacy).observations == "Línea 1\nLínea 2"
    assert to_submission_dto(both).observations == "Gana"


def test_unknown_fields_are_ignored() -> None:
    payload = QuoteSubmissionRequest.model_validate(submission_payload(recaptchaToken="abc"))
    assert to_submission_dto(payload).first_name == "Ana"


def test_provenance_prefers_first_forwarded_hop() -> None:
    dto = to_provenance_dto(
        _request({"X-Forwarded-For": "200.1.1.1, 10.0.0.1", "User-Agent": "Mozilla/5.0"})
    )
    assert dto.ip_address == "200.1.1.1"
    assert dto.user_agent == "Mozilla/5.0"


def test_provenance_falls_back_to_peer_address() -> None:
    assert to_provenance_dto(_request({})).ip_address == "9.9.9.9"
    assert to_provenance_dto(_request({}, client=None)).ip_address is None


def test_provenance_headers_are_cut_to_storage_width() -> None:
    dto = to_provenance_dto(
        _request({"X-Forwarded-For": "a" * 200 + ", 10.0.0.1", "User-Agent": "U" * 2000})
    )
    assert dto.ip_address == "a" * 64
    assert dto.user_agent == "U" * 512


@pytest.mark.parametrize(
    "overrides",
    [
        {"firstName": "A" * 121},
        {"dni": "1" * 33},
        {"phone": "9" * 41},
        {"email": "a" * 250 + "@qi.pe"},
        {"companyName": "C" * 256},
        {"source": "s" * 65},
    ],
)
def test_oversized_client_fields_are_rejected(overrides: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        QuoteSubmissionRequest.model_validate(submission_payload(**overrides))
