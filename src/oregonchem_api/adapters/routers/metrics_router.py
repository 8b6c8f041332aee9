# src/oregonchem_api/adapters/routers/metrics_router.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Prometheus text exposition at ``/metrics``."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from oregonchem_api.infrastructure.observability import metrics

router = APIRouter()

# Collectors are lazy; touching them here makes every family visible on the
# first scrape, before any quote has been submitted.
_COLLECTORS = (
    metrics.get_quote_pipeline_stage_total,
    metrics.get_quote_pipeline_duration_seconds,
    metrics.get_mail_send_total,
    metrics.get_readyz_db_latency_seconds,
)


@router.get("/metrics", include_in_schema=False)
async def scrape() -> Response:
    for collector in _COLLECTORS:
        collector()
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
