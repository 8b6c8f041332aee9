# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Use Case: Update Quote Status

Purpose:
    Move a quote to any of the four statuses. There is no transition graph;
    the only rule is membership in the enumeration.

Layer: application/use_cases
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from oregonchem_api.application.schemas.dto.quotes import QuoteDTO
from oregonchem_api.application.uow import UnitOfWork, run_in_uow
from oregonchem_api.domain.entities.quote import Quote
from oregonchem_api.domain.enums.quotes import QuoteStatus
from oregonchem_api.domain.exceptions.quotes import InvalidQuoteStatus, QuoteNotFound
from oregonchem_api.domain.interfaces.repositories.quote_repository import QuoteRepository
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class UpdateQuoteStatusUseCase:
    """Update a quote's status.

    Raises:
        InvalidQuoteStatus: If ``status`` is not one of the four values.
        QuoteNotFound: If no quote matches the identifier.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._uow = uow
        self._clock = clock

    async def execute(self, quote_id: UUID, status: str | QuoteStatus | None) -> QuoteDTO:
        try:
            new_status = QuoteStatus(status)
        except ValueError as exc:
            raise InvalidQuoteStatus(
                "Estado inválido",
                details={"status": status, "allowed": [s.value for s in QuoteStatus]},
            ) from exc

        async def _update(tx: UnitOfWork) -> Quote | None:
            repo: QuoteRepository = tx.get_repository(QuoteRepository)
            return await repo.update_status(quote_id, new_status, updated_at=self._clock())

        updated = await run_in_uow(self._uow, _update)
        if updated is None:
            raise QuoteNotFound("Cotización no encontrada", details={"id": str(quote_id)})

        logger.info(
            "quote_status_updated",
            extra={"extra": {"quote_id": str(quote_id), "status": new_status.value}},
        )
        return QuoteDTO.from_entity(updated)
