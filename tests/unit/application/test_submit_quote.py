from __future__ import annotations

from datetime import UTC, datetime

import pytest
from fakes import FAKE_PDF, FakeCatalog, FakeNotifier, FakeRenderer, FakeUnitOfWork

from oregonchem_api.application.schemas.dto.quotes import (
    ContactPreferencesDTO,
    QuoteItemInputDTO,
    QuoteSubmissionDTO,
    RequestProvenanceDTO,
)
from oregonchem_api.application.use_cases.quotes.outcome import StageStatus
from oregonchem_api.application.use_cases.quotes.submit_quote import SubmitQuoteUseCase
from oregonchem_api.domain.enums.quotes import ClientType, PurchaseFrequency, QuoteStatus
from oregonchem_api.domain.exceptions.quotes import QuotePersistenceError, QuoteValidationError

FIXED_NOW = datetime(2025, 3, 14, 20, 0, tzinfo=UTC)


def _submission(**overrides: object) -> QuoteSubmissionDTO:
    data: dict[str, object] = {
        "client_type": ClientType.COMPANY,
        "first_name": "Luis",
        "last_name": "Rojas",
        "dni": "40123456",
        "phone": "999888777",
        "email": "compras@acme.pe",
        "company_name": "ACME SAC",
        "ruc": "20123456789",
        "products": [
            QuoteItemInputDTO(
                product_id="prod-1",
                quantity=10,
                frequency=PurchaseFrequency.MONTHLY,
                presentation_id="pres-20",
            ),
            QuoteItemInputDTO(
                product_id="ghost",
                quantity=1,
                frequency=PurchaseFrequency.ONCE,
                presentation_label="Cilindro",
            ),
        ],
        "contact_preferences": ContactPreferencesDTO(email=True),
        "observations": "Primera línea\nSegunda línea",
    }
    data.update(overrides)
    return QuoteSubmissionDTO.model_validate(data)


def _use_case(
    *,
    uow: FakeUnitOfWork | None = None,
    catalog: FakeCatalog | None = None,
    renderer: FakeRenderer | None = None,
    notifier: FakeNotifier | None = None,
    require_products: bool = True,
) -> SubmitQuoteUseCase:
    return SubmitQuoteUseCase(
        uow=uow or FakeUnitOfWork(),
        catalog=catalog
        or FakeCatalog(products={"prod-1": "Soda Cáustica"}, presentations={"pres-20": "20 kg"}),
        renderer=renderer or FakeRenderer(),
        notifier=notifier or FakeNotifier(),
        require_products=require_products,
        clock=lambda: FIXED_NOW,
    )


@pytest.mark.asyncio
async def test_submission_is_persisted_pending_and_fully_processed() -> None:
    uow, renderer, notifier = FakeUnitOfWork(), FakeRenderer(), FakeNotifier()
    uc = _use_case(uow=uow, renderer=renderer, notifier=notifier)

    result = await uc.execute(
        _submission(),
        RequestProvenanceDTO(ip_address="10.0.0.1", user_agent="pytest"),
    )

    quote = result.quote
    assert quote.status is QuoteStatus.PENDING
    assert quote.created_at == quote.updated_at == FIXED_NOW
    assert quote.ip_address == "10.0.0.1"
    assert uow.repo.rows[quote.id] == quote
    assert uow.commits == 1

    assert renderer.rendered == [quote]
    assert notifier.quotes == [(quote, FAKE_PDF)]
    assert result.outcome.rendered.status is StageStatus.SUCCEEDED
    assert result.outcome.notified.status is StageStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_enrichment_resolves_names_and_uses_placeholder_for_misses() -> None:
    uc = _use_case()

    result = await uc.execute(_submission())

    first, second = result.quote.products
    assert first.product_name == "Soda Cáustica"
    assert first.presentation_label == "20 kg"
    assert second.product_name == "Producto desconocido"
    assert second.presentation_label == "Cilindro"
    assert result.outcome.unresolved_products == ("ghost",)


@pytest.mark.asyncio
async def test_catalog_failure_does_not_fail_submission() -> None:
    uc = _use_case(catalog=FakeCatalog(broken=True))

    result = await uc.execute(_submission())

    assert {i.product_name for i in result.quote.products} == {"Producto desconocido"}
    assert result.outcome.persisted.ok


@pytest.mark.asyncio
async def test_render_failure_skips_notification_but_keeps_quote() -> None:
    uow, notifier = FakeUnitOfWork(), FakeNotifier()
    uc = _use_case(uow=uow, renderer=FakeRenderer(fail=True), notifier=notifier)

    result = await uc.execute(_submission())

    assert result.quote.id in uow.repo.rows
    assert result.outcome.rendered.status is StageStatus.FAILED
    assert result.outcome.notified.status is StageStatus.SKIPPED
    assert notifier.quotes == []


@pytest.mark.asyncio
async def test_notification_failure_is_recorded_not_raised() -> None:
    uow = FakeUnitOfWork()
    uc = _use_case(uow=uow, notifier=FakeNotifier(fail=True))

    result = await uc.execute(_submission())

    assert result.quote.id in uow.repo.rows
    assert result.outcome.notified.status is StageStatus.FAILED
    assert result.outcome.notified.error == "smtp down"
    assert result.outcome.as_log_extra()["notify"] == "failed"


@pytest.mark.asyncio
async def test_empty_products_rejected_before_any_side_effect() -> None:
    uow, catalog, renderer = FakeUnitOfWork(), FakeCatalog(), FakeRenderer()
    uc = _use_case(uow=uow, catalog=catalog, renderer=renderer)

    with pytest.raises(QuoteValidationError):
        await uc.execute(_submission(products=[]))

    assert uow.repo.rows == {}
    assert catalog.product_calls == []
    assert renderer.rendered == []


@pytest.mark.asyncio
async def test_empty_products_allowed_when_policy_disabled() -> None:
    uc = _use_case(require_products=False)

    result = await uc.execute(_submission(products=[]))

    assert result.quote.products == ()


@pytest.mark.asyncio
async def test_persistence_failure_is_fatal() -> None:
    renderer = FakeRenderer()
    uc = _use_case(uow=FakeUnitOfWork(fail_with=RuntimeError("db gone")), renderer=renderer)

    with pytest.raises(QuotePersistenceError):
        await uc.execute(_submission())

    assert renderer.rendered == []
