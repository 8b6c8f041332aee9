# src/oregonchem_api/dependencies/core/bootstrap.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Startup and shutdown of shared resources.

:func:`bootstrap` applies the configured log level, opens the database and a
shared ``httpx.AsyncClient`` (remote logo fetches), and releases both on exit
even when the application body fails.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from fastapi import FastAPI

from oregonchem_api.config.settings import Settings, get_settings
from oregonchem_api.infrastructure.database import session as database
from oregonchem_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True, slots=True)
class BootstrapState:
    settings: Settings
    http_client: httpx.AsyncClient


@asynccontextmanager
async def bootstrap(app: FastAPI) -> AsyncIterator[BootstrapState]:
    settings = get_settings()
    if settings.log_level:
        configure_root_logging(settings.log_level.upper())
    database.open_database(settings)
    http_client = httpx.AsyncClient(follow_redirects=True)
    logger.info(
        "bootstrap_started",
        extra={"extra": {"environment": settings.environment.value, "app": app.title}},
    )
    try:
        yield BootstrapState(settings=settings, http_client=http_client)
    finally:
        await http_client.aclose()
        await database.close_database()
        logger.info("bootstrap_stopped", extra={"extra": {}})
