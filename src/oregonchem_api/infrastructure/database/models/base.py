# src/oregonchem_api/infrastructure/database/models/base.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Declarative base shared by the quote and catalog tables.

Generic column types (``Uuid``, ``JSON``) keep the models portable between
PostgreSQL and the SQLite databases used in tests. Constraint names follow a
fixed convention so Alembic autogenerate produces stable diffs.
"""

from __future__ import annotations

import os
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

#: ``DB_SCHEMA`` from the environment; ``None`` uses the connection default.
DEFAULT_DB_SCHEMA: str | None = os.getenv("DB_SCHEMA") or None

metadata = MetaData(
    schema=DEFAULT_DB_SCHEMA,
    naming_convention={
        "pk": "pk_%(table_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "ix": "ix_%(column_0_label)s",
    },
)


def now_utc() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    metadata = metadata


class IdentityMixin:
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """``created_at``/``updated_at`` in UTC, set client-side with a server fallback."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc, server_default=func.now()
    )
