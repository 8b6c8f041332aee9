# src/oregonchem_api/infrastructure/logging/logger.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""JSON logging for the Oregonchem API.

One JSON object per line on stderr. Every line carries ``ts``, ``level``,
``logger``, ``service`` and ``message``; ``request_id`` is added when the
request middleware has set one for the current task. Structured fields are
passed as ``extra={"extra": {...}}`` and merged at the top level::

    log = get_json_logger(__name__)
    log.info("quote_persisted", extra={"extra": {"quote_id": str(quote.id)}})
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_request_id",
    "set_request_context",
]

_request_id: ContextVar[str | None] = ContextVar("oregonchem_request_id", default=None)


def set_request_context(*, request_id: str | None = None) -> None:
    """Bind ``request_id`` to the running task; ``None`` leaves it unchanged."""
    if request_id is not None:
        _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class JsonLineFormatter(logging.Formatter):
    """Render log records as compact JSON lines."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self._service,
            "message": record.getMessage(),
        }
        rid = getattr(record, "request_id", None) or _request_id.get()
        if rid:
            line["request_id"] = rid
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            line["exc_type"] = type(exc).__name__
            line["exc_message"] = str(exc)
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            line.update(fields)
        return json.dumps(line, ensure_ascii=False, separators=(",", ":"), default=_encode)


def configure_root_logging(level: str | int | None = None) -> None:
    """Install the JSON handler on the root logger.

    Safe to call repeatedly: the level is updated, the handler is installed
    only once.

    Args:
        level: Explicit level; otherwise ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(level if level is not None else os.getenv("LOG_LEVEL", "INFO").upper())
    if any(isinstance(h.formatter, JsonLineFormatter) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLineFormatter(os.getenv("SERVICE_NAME", "oregonchem-api")))
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the named logger; output goes through the root JSON handler."""
    return logging.getLogger(name)
