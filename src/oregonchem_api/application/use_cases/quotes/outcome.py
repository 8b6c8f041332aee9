# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Quote Pipeline Outcome

Purpose:
    Typed record of what happened to each stage of a quote submission. The
    HTTP caller only ever sees "quote recorded"; this outcome is what logs,
    metrics and tests inspect to observe degraded renders or notifications.

Layer: application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from oregonchem_api.domain.entities.quote import Quote


class StageStatus(str, Enum):
    """Result of a single pipeline stage."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class StageResult:
    """Status of one stage plus the failure reason, if any."""

    status: StageStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the stage succeeded."""
        return self.status is StageStatus.SUCCEEDED


@dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Per-stage outcome of a quote submission.

    Attributes:
        persisted: Durability stage; a submission that returns always has it succeeded.
        rendered: PDF rendering stage.
        notified: Notification stage (skipped when no PDF was produced).
        unresolved_products: Product ids that received the placeholder name.
    """

    persisted: StageResult
    rendered: StageResult
    notified: StageResult
    unresolved_products: tuple[str, ...] = field(default_factory=tuple)

    def stages(self) -> dict[str, StageResult]:
        """Return stage results keyed by metric label."""
        return {"persist": self.persisted, "render": self.rendered, "notify": self.notified}

    def as_log_extra(self) -> dict[str, Any]:
        """Flatten into a JSON-friendly mapping for structured logs."""
        out: dict[str, Any] = {
            name: result.status.value for name, result in self.stages().items()
        }
        errors = {name: r.error for name, r in self.stages().items() if r.error}
        if errors:
            out["errors"] = errors
        if self.unresolved_products:
            out["unresolved_products"] = list(self.unresolved_products)
        return out


@dataclass(frozen=True, slots=True)
class QuoteSubmissionResult:
    """Persisted quote plus the pipeline outcome."""

    quote: Quote
    outcome: PipelineOutcome
