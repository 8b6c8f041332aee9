# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""HTTP schemas (Adapters Layer): envelopes and resource payloads."""

from __future__ import annotations

from .base import BaseHTTPSchema, CamelHTTPSchema
from .envelopes import ApiEnvelope, ErrorEnvelope, Pagination

__all__ = ["ApiEnvelope", "BaseHTTPSchema", "CamelHTTPSchema", "ErrorEnvelope", "Pagination"]
