# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Root model for application DTOs.

DTOs cross the boundary between use cases and adapters. They know nothing of
HTTP aliases: adapters map camelCase payloads onto them explicitly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    """Strict DTO: unknown fields are rejected and strings are trimmed."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)
