# migrations/env.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Alembic environment for the quote and catalog tables.

``ENVIRONMENT`` must be set, and the target database name must be one of the
names allowed for that environment (``ALEMBIC_ALLOWED_DATABASES`` replaces the
built-in list). ``.env`` and ``.env.<ENVIRONMENT>`` are loaded without
overriding exported variables.

    ENVIRONMENT=development alembic -x show_url=1 upgrade head
"""

from __future__ import annotations

import asyncio
import logging
import logging.config
import os
from pathlib import Path
from typing import Any

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import create_async_engine

from oregonchem_api.infrastructure.database.models import catalog, quotes  # noqa: F401
from oregonchem_api.infrastructure.database.models.base import DEFAULT_DB_SCHEMA, metadata

config = context.config
if config.config_file_name is not None:
    logging.config.fileConfig(config.config_file_name)
logger = logging.getLogger("alembic.env")

ALLOWED_DATABASES: dict[str, frozenset[str]] = {
    "test": frozenset({"oregonchem_test"}),
    "development": frozenset({"oregonchem"}),
    "staging": frozenset({"oregonchem"}),
    "production": frozenset({"oregonchem"}),
}

_root = Path(__file__).resolve().parents[1]
for _name in (".env", f".env.{os.getenv('ENVIRONMENT', '').strip().lower()}"):
    if _name != ".env." and (_root / _name).is_file():
        load_dotenv(_root / _name, override=False)


def _masked(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable url>"


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("Set DATABASE_URL (or sqlalchemy.url in alembic.ini).")
    return url


def _checked_url() -> str:
    """Database URL, after the environment and allowlist checks."""
    env = os.getenv("ENVIRONMENT", "").strip().lower()
    if not env:
        raise RuntimeError("ENVIRONMENT must be set before running migrations.")

    url = _database_url()
    override = os.getenv("ALEMBIC_ALLOWED_DATABASES")
    if override:
        allowed = frozenset(name.strip() for name in override.split(",") if name.strip())
    elif env in ALLOWED_DATABASES:
        allowed = ALLOWED_DATABASES[env]
    else:
        raise RuntimeError(f"No migration allowlist for ENVIRONMENT={env!r}.")

    database = make_url(url).database or ""
    if database not in allowed:
        raise RuntimeError(
            f"Database {database!r} is not allowed for ENVIRONMENT={env!r} "
            f"(allowed: {', '.join(sorted(allowed))}; url: {_masked(url)})."
        )
    if context.get_x_argument(as_dictionary=True).get("show_url") == "1" or (
        os.getenv("ALEMBIC_SHOW_URL") == "1"
    ):
        logger.info("migrating %s", _masked(url))
    return url


def _options() -> dict[str, Any]:
    return {
        "target_metadata": metadata,
        "compare_type": True,
        "compare_server_default": True,
        "include_schemas": DEFAULT_DB_SCHEMA is not None,
        "version_table_schema": DEFAULT_DB_SCHEMA,
    }


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_options())
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool, echo=os.getenv("ECHO_SQL") == "1")
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    context.configure(
        url=_checked_url(), literal_binds=True, dialect_opts={"paramstyle": "named"}, **_options()
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_migrate_online(_checked_url()))
