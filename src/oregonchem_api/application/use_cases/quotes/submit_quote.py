# src/oregonchem_api/application/use_cases/quotes/submit_quote.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Use Case: Submit Quote

Purpose:
    Capture a customer quote request and fan out the follow-up work:

        enrichment -> persistence -> render (best effort) -> notify (best effort)

    Stages run strictly in that order. Line-item enrichment is the only
    concurrent step: every catalog lookup is fired at once and awaited
    together before the record is built.

Failure model:
    * Validation errors surface before any side effect.
    * Catalog misses and lookup errors never fail the request; the item gets
      a placeholder name.
    * Persistence failure is fatal and raised as ``QuotePersistenceError``.
    * Render and notify failures are recorded in the returned
      :class:`PipelineOutcome` and logged; the caller still gets the quote.
    * Notification is attempted only when a PDF was produced.

Layer: application/use_cases
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from oregonchem_api.application.schemas.dto.quotes import (
    QuoteItemInputDTO,
    QuoteSubmissionDTO,
    RequestProvenanceDTO,
)
from oregonchem_api.application.uow import UnitOfWork, run_in_uow
from oregonchem_api.application.use_cases.quotes.outcome import (
    PipelineOutcome,
    QuoteSubmissionResult,
    StageResult,
    StageStatus,
)
from oregonchem_api.domain.entities.quote import ContactPreferences, Quote, QuoteLineItem
from oregonchem_api.domain.enums.quotes import QuoteStatus
from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.domain.exceptions.quotes import (
    QuotePersistenceError,
    QuoteValidationError,
)
from oregonchem_api.domain.interfaces.gateways.document_renderer import DocumentRenderer
from oregonchem_api.domain.interfaces.gateways.notifier import QuoteNotifier
from oregonchem_api.domain.interfaces.repositories.catalog_lookup import CatalogLookup
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository
from oregonchem_api.infrastructure.logging.logger import get_json_logger
from oregonchem_api.infrastructure.observability.metrics import (
    get_quote_pipeline_duration_seconds,
    get_quote_pipeline_stage_total,
)

logger = get_json_logger(__name__)

DEFAULT_UNKNOWN_PRODUCT_NAME = "Producto desconocido"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SubmitQuoteUseCase:
    """Quote submission pipeline.

    Args:
        uow: Unit of work exposing the :class:`QuoteRepository`.
        catalog: Catalog lookup used for line-item enrichment.
        renderer: PDF renderer.
        notifier: Company/client notification dispatcher.
        require_products: Reject submissions with an empty product list.
        unknown_product_name: Placeholder for products the catalog cannot resolve.
        clock: Time source for ``created_at``/``updated_at``.
    """

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        catalog: CatalogLookup,
        renderer: DocumentRenderer,
        notifier: QuoteNotifier,
        require_products: bool = True,
        unknown_product_name: str = DEFAULT_UNKNOWN_PRODUCT_NAME,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._uow = uow
        self._catalog = catalog
        self._renderer = renderer
        self._notifier = notifier
        self._require_products = require_products
        self._unknown_product_name = unknown_product_name
        self._clock = clock

    async def execute(
        self,
        submission: QuoteSubmissionDTO,
        provenance: RequestProvenanceDTO | None = None,
    ) -> QuoteSubmissionResult:
        """Run the pipeline for one submission.

        Args:
            submission: Normalized submission payload.
            provenance: Client IP and user agent captured by the HTTP adapter.

        Returns:
            QuoteSubmissionResult: The persisted quote and the stage outcome.

        Raises:
            QuoteValidationError: Empty product list (when required) or invalid fields.
            QuotePersistenceError: The quote store failed.
        """
        started = time.perf_counter()
        if self._require_products and not submission.products:
            raise QuoteValidationError(
                "Debe incluir al menos un producto",
                details={"field": "products"},
            )

        items, unresolved = await self._enrich(submission.products)
        quote = self._build_quote(submission, provenance or RequestProvenanceDTO(), items)

        stored = await self._persist(quote)
        pdf, rendered = await self._render(stored)
        notified = await self._notify(stored, pdf)

        outcome = PipelineOutcome(
            persisted=StageResult(StageStatus.SUCCEEDED),
            rendered=rendered,
            notified=notified,
            unresolved_products=unresolved,
        )
        self._record(stored, outcome, time.perf_counter() - started)
        return QuoteSubmissionResult(quote=stored, outcome=outcome)

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    async def _enrich(
        self,
        products: Sequence[QuoteItemInputDTO],
    ) -> tuple[list[QuoteLineItem], tuple[str, ...]]:
        resolved = await asyncio.gather(*(self._resolve_item(p) for p in products))
        items = [item for item, _ in resolved]
        unresolved = tuple(item.product_id for item, found in resolved if not found)
        return items, unresolved

    async def _resolve_item(self, product: QuoteItemInputDTO) -> tuple[QuoteLineItem, bool]:
        name, label = await asyncio.gather(
            self._lookup_product_name(product.product_id),
            self._lookup_presentation_label(product),
        )
        item = QuoteLineItem(
            product_id=product.product_id,
            product_name=name or self._unknown_product_name,
            quantity=product.quantity,
            frequency=product.frequency,
            presentation_id=product.presentation_id,
            presentation_label=label,
        )
        return item, name is not None

    async def _lookup_product_name(self, product_id: str) -> str | None:
        try:
            name = await self._catalog.get_product_name(product_id)
        except Exception as exc:
            logger.warning(
                "quote_enrichment_error",
                extra={"extra": {"product_id": product_id, "error": str(exc)}},
            )
            return None
        if name is None:
            logger.warning("quote_enrichment_miss", extra={"extra": {"product_id": product_id}})
        return name

    async def _lookup_presentation_label(self, product: QuoteItemInputDTO) -> str | None:
        if product.presentation_label:
            return product.presentation_label
        if not product.presentation_id:
            return None
        try:
            return await self._catalog.get_presentation_label(product.presentation_id)
        except Exception as exc:
            logger.warning(
                "quote_presentation_lookup_error",
                extra={
                    "extra": {"presentation_id": product.presentation_id, "error": str(exc)},
                },
            )
            return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _build_quote(
        self,
        submission: QuoteSubmissionDTO,
        provenance: RequestProvenanceDTO,
        items: list[QuoteLineItem],
    ) -> Quote:
        now = self._clock()
        prefs = submission.contact_preferences
        try:
            return Quote(
                id=uuid.uuid4(),
                client_type=submission.client_type,
                first_name=submission.first_name,
                last_name=submission.last_name,
                dni=submission.dni,
                phone=submission.phone,
                email=submission.email,
                company_name=submission.company_name or None,
                ruc=submission.ruc or None,
                products=tuple(items),
                contact_preferences=ContactPreferences(
                    email=prefs.email,
                    whatsapp=prefs.whatsapp,
                    phone=prefs.phone,
                ),
                observations=submission.observations,
                status=QuoteStatus.PENDING,
                source=submission.source,
                ip_address=provenance.ip_address,
                user_agent=provenance.user_agent,
                created_at=now,
                updated_at=now,
            )
        except ValueError as exc:
            raise QuoteValidationError(str(exc)) from exc

    async def _persist(self, quote: Quote) -> Quote:
        async def _store(tx: UnitOfWork) -> Quote:
            repo: QuoteRepository = tx.get_repository(QuoteRepository)
            stored: Quote = await repo.add(quote)
            return stored

        stage_total = get_quote_pipeline_stage_total()
        try:
            stored = await run_in_uow(self._uow, _store)
        except DomainError:
            stage_total.labels(stage="persist", status=StageStatus.FAILED.value).inc()
            raise
        except Exception as exc:
            stage_total.labels(stage="persist", status=StageStatus.FAILED.value).inc()
            logger.exception("quote_persist_failed", extra={"extra": {"quote_id": str(quote.id)}})
            raise QuotePersistenceError(
                "No se pudo registrar la cotización",
                details={"quote_id": str(quote.id)},
            ) from exc

        logger.info(
            "quote_persisted",
            extra={"extra": {"quote_id": str(stored.id), "items": len(stored.products)}},
        )
        return stored

    # ------------------------------------------------------------------
    # Best-effort stages
    # ------------------------------------------------------------------

    async def _render(self, quote: Quote) -> tuple[bytes | None, StageResult]:
        try:
            pdf = await self._renderer.render(quote)
        except Exception as exc:
            logger.exception(
                "quote_render_failed",
                extra={"extra": {"quote_id": str(quote.id)}},
            )
            return None, StageResult(StageStatus.FAILED, error=str(exc) or type(exc).__name__)
        return pdf, StageResult(StageStatus.SUCCEEDED)

    async def _notify(self, quote: Quote, pdf: bytes | None) -> StageResult:
        if pdf is None:
            logger.info(
                "quote_notify_skipped",
                extra={"extra": {"quote_id": str(quote.id), "reason": "no_document"}},
            )
            return StageResult(StageStatus.SKIPPED)
        try:
            await self._notifier.dispatch(quote, pdf)
        except Exception as exc:
            logger.exception(
                "quote_notify_failed",
                extra={"extra": {"quote_id": str(quote.id)}},
            )
            return StageResult(StageStatus.FAILED, error=str(exc) or type(exc).__name__)
        return StageResult(StageStatus.SUCCEEDED)

    @staticmethod
    def _record(quote: Quote, outcome: PipelineOutcome, elapsed_s: float) -> None:
        stage_total = get_quote_pipeline_stage_total()
        for stage, result in outcome.stages().items():
            stage_total.labels(stage=stage, status=result.status.value).inc()
        get_quote_pipeline_duration_seconds().observe(elapsed_s)
        logger.info(
            "quote_pipeline_completed",
            extra={
                "extra": {
                    "quote_id": str(quote.id),
                    "elapsed_ms": round(elapsed_s * 1000.0, 2),
                    **outcome.as_log_extra(),
                }
            },
        )
