# src/oregonchem_api/domain/entities/base.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Shared pieces of the domain entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BaseEntity:
    """Field-less root of the frozen entities.

    Subclasses check their invariants in ``__post_init__`` and raise
    ``ValueError``; the base hook accepts everything.
    """

    def __post_init__(self) -> None:
        pass


def require_text(value: str, field: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{field} is required")
