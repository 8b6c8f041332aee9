# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""FastAPI dependency wiring for health probes.

Provides the default `DbProbe` bound to the process-wide session factory.
This module contains no probe logic, only wiring; the implementation stays
in infrastructure.
"""

from __future__ import annotations

from oregonchem_api.infrastructure.database.session import get_sessionmaker
from oregonchem_api.infrastructure.health.probe import DbProbe


def get_health_probe() -> DbProbe:
    """Return a database probe for the active engine."""
    return DbProbe(get_sessionmaker())
