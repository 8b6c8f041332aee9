# src/oregonchem_api/infrastructure/observability/metrics.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Prometheus collectors for the quote service.

Collectors are created on first use against whatever
``prometheus_client.REGISTRY`` is active at that moment and cached per
registry, so re-imports (uvicorn reload, test apps) reuse the registered
instance instead of failing on duplicate names.

    ``quote_pipeline_stage_total{stage,status}``
        stage ``persist|render|notify``, status ``succeeded|failed|skipped``.
    ``quote_pipeline_duration_seconds``
        Submission latency, enrichment through notification.
    ``mail_send_total{audience,result}``
        audience ``quote_company|quote_client|contact_company|contact_client``,
        result ``success|failure``.
    ``readyz_db_latency_seconds``
        Database probe latency.
"""

from __future__ import annotations

import threading
from typing import Any, Final, TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram

from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

LATENCY_BUCKETS: Final = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

C = TypeVar("C", Counter, Histogram)

_lock = threading.RLock()
_cache: dict[tuple[int, str], Any] = {}


def _registered(kind: type[C], name: str) -> C | None:
    # Counters are stored without their "_total" suffix.
    names = getattr(prom.REGISTRY, "_names_to_collectors", {})
    found = names.get(name.removesuffix("_total")) or names.get(name)
    return found if isinstance(found, kind) else None


def _collector(
    kind: type[C], name: str, documentation: str, labelnames: tuple[str, ...] = (), **kwargs: Any
) -> C:
    key = (id(prom.REGISTRY), name)
    with _lock:
        if key in _cache:
            return _cache[key]
        collector = _registered(kind, name)
        if collector is None:
            try:
                collector = kind(name, documentation, labelnames, registry=prom.REGISTRY, **kwargs)
            except ValueError:
                collector = _registered(kind, name)
                if collector is None:
                    logger.exception("metric_registration_failed", extra={"extra": {"name": name}})
                    raise
        _cache[key] = collector
        return collector


def get_quote_pipeline_stage_total() -> Counter:
    return _collector(
        Counter,
        "quote_pipeline_stage_total",
        "Quote pipeline stage outcomes",
        ("stage", "status"),
    )


def get_quote_pipeline_duration_seconds() -> Histogram:
    return _collector(
        Histogram,
        "quote_pipeline_duration_seconds",
        "Quote submission latency in seconds",
        buckets=LATENCY_BUCKETS,
    )


def get_mail_send_total() -> Counter:
    return _collector(
        Counter,
        "mail_send_total",
        "Notification mails by audience and result",
        ("audience", "result"),
    )


def get_readyz_db_latency_seconds() -> Histogram:
    return _collector(
        Histogram,
        "readyz_db_latency_seconds",
        "Database readiness probe latency in seconds",
        buckets=LATENCY_BUCKETS,
    )
