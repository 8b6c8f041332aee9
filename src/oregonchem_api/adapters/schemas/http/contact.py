# src/oregonchem_api/adapters/schemas/http/contact.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Contact-form HTTP schema.

Every field is optional at the schema level so that a missing field yields
the endpoint's own "Missing required fields" answer instead of a generic
validation error.
"""

from __future__ import annotations

from pydantic import ConfigDict

from oregonchem_api.adapters.schemas.http.base import CamelHTTPSchema


class ContactRequest(CamelHTTPSchema):
    """Body of ``POST /contact``."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None
