# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Root of the domain error hierarchy.

Every error a use case raises on purpose derives from :class:`DomainError`.
The HTTP layer maps subclasses to status codes; ``code`` is the stable
machine-readable value placed in the error envelope and ``details`` goes to
the logs only.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details or {})
