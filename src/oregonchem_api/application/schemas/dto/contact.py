# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Contact DTOs (Application Layer)."""

from __future__ import annotations

from oregonchem_api.application.schemas.dto.base import BaseDTO


class ContactMessageDTO(BaseDTO):
    """Contact-form payload. Presence of required fields is checked by the use case."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None
