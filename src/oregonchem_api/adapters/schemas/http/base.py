# src/oregonchem_api/adapters/schemas/http/base.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Pydantic bases for request and response bodies.

Envelopes and health payloads keep snake_case keys. Quote and contact
resources use :class:`CamelHTTPSchema` because the storefront speaks
camelCase; both spellings are accepted when parsing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseHTTPSchema(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-mode dump using wire names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class CamelHTTPSchema(BaseHTTPSchema):
    model_config = ConfigDict(alias_generator=to_camel)
