# src/oregonchem_api/adapters/uow/__init__.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Unit of Work implementations (Adapters Layer)

Application-layer code depends only on the `UnitOfWork` protocol from
`oregonchem_api.application.uow`.
"""

from __future__ import annotations

from .sqlalchemy_uow import SqlAlchemyUnitOfWork

__all__ = ["SqlAlchemyUnitOfWork"]
