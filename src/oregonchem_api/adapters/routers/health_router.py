# src/oregonchem_api/adapters/routers/health_router.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Liveness, readiness and the storefront's ``/api/health`` summary.

The probe is resolved through ``probe_provider`` (an instance, so tests can
override it by identity). ``/health/ready`` is an unpublished alias of
``/health/readiness``.
"""

from __future__ import annotations

import time
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Protocol

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from oregonchem_api.adapters.schemas.http.base import BaseHTTPSchema
from oregonchem_api.dependencies.health import get_health_probe
from oregonchem_api.dependencies.quotes import SettingsDep
from oregonchem_api.infrastructure.database.models.base import now_utc
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter()
summary_router = APIRouter()

SLOW_PROBE_MS = 200.0


class HealthState(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"


class CheckResult(BaseHTTPSchema):
    name: str = Field(..., examples=["db"])
    status: Literal["ok", "down"]
    detail: str | None = None
    duration_ms: float


class ReadinessResponse(BaseHTTPSchema):
    status: HealthState
    checks: list[CheckResult] = Field(default_factory=list)


class LivenessResponse(BaseHTTPSchema):
    status: Literal["ok"] = "ok"


class ServiceHealthResponse(BaseHTTPSchema):
    """Shape consumed by the storefront status widget."""

    status: HealthState
    timestamp: datetime
    database: Literal["connected", "disconnected"]
    environment: str


class HealthProbe(Protocol):
    async def db(self) -> tuple[bool, str | None]: ...


class ProbeProvider:
    def __call__(self) -> HealthProbe:
        return get_health_probe()


probe_provider = ProbeProvider()
ProbeDep = Annotated[HealthProbe, Depends(probe_provider, use_cache=False)]


async def check_database(probe: HealthProbe) -> CheckResult:
    """Run the database probe and time it."""
    started = time.perf_counter()
    ok, detail = await probe.db()
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    if elapsed_ms > SLOW_PROBE_MS:
        logger.warning("db_probe_slow", extra={"extra": {"duration_ms": round(elapsed_ms, 2)}})
    return CheckResult(
        name="db", status="ok" if ok else "down", detail=detail, duration_ms=elapsed_ms
    )


@router.get(
    "/z",
    summary="Liveness",
    operation_id="health_liveness",
    response_model=LivenessResponse,
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get(
    "/readiness",
    summary="Readiness",
    operation_id="health_readiness",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
)
@router.get("/ready", include_in_schema=False, response_model=ReadinessResponse)
async def readiness(response: Response, probe: ProbeDep) -> ReadinessResponse:
    check = await check_database(probe)
    state = HealthState.OK if check.status == "ok" else HealthState.DEGRADED
    if state is HealthState.DEGRADED:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_degraded", extra={"extra": {"detail": check.detail}})
    return ReadinessResponse(status=state, checks=[check])


@summary_router.get(
    "/api/health",
    summary="Service health summary",
    operation_id="api_health",
    response_model=ServiceHealthResponse,
    responses={503: {"description": "Database unreachable", "model": ServiceHealthResponse}},
)
async def service_health(
    response: Response, probe: ProbeDep, settings: SettingsDep
) -> ServiceHealthResponse:
    check = await check_database(probe)
    connected = check.status == "ok"
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ServiceHealthResponse(
        status=HealthState.OK if connected else HealthState.DEGRADED,
        timestamp=now_utc(),
        database="connected" if connected else "disconnected",
        environment=settings.environment.value,
    )
