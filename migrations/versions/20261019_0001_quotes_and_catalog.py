# migrations/versions/20261019_0001_quotes_and_catalog.py
"""Create quotes, catalog_products and catalog_presentations."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from oregonchem_api.infrastructure.database.models.base import DEFAULT_DB_SCHEMA

# Revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    schema = DEFAULT_DB_SCHEMA
    if schema:
        op.execute(sa.text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))

    op.create_table(
        "catalog_presentations",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("qty", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        sa.Column("pretty", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_presentations"),
        schema=schema,
    )

    op.create_table(
        "catalog_products",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="draft"),
        sa.Column("presentation_ids", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_products"),
        sa.UniqueConstraint("slug", name="uq_catalog_products_slug"),
        schema=schema,
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("client_type", sa.String(length=32), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("dni", sa.String(length=32), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=True),
        sa.Column("ruc", sa.String(length=32), nullable=True),
        sa.Column("products", sa.JSON(), nullable=False),
        sa.Column("contact_preferences", sa.JSON(), nullable=False),
        sa.Column("observations", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("source", sa.String(length=64), nullable=False, server_default="website"),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_quotes"),
        schema=schema,
    )
    op.create_index(
        "ix_quotes_status_created_at",
        "quotes",
        ["status", "created_at"],
        schema=schema,
    )
    op.create_index("ix_quotes_email", "quotes", ["email"], schema=schema)


def downgrade() -> None:
    schema = DEFAULT_DB_SCHEMA
    op.drop_index("ix_quotes_email", table_name="quotes", schema=schema)
    op.drop_index("ix_quotes_status_created_at", table_name="quotes", schema=schema)
    op.drop_table("quotes", schema=schema)
    op.drop_table("catalog_products", schema=schema)
    op.drop_table("catalog_presentations", schema=schema)
