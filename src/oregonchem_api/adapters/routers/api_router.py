# src/oregonchem_api/adapters/routers/api_router.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Top-level router mounted by the application factory.

    /health/*        liveness and readiness
    /api/health      storefront status summary
    /quotes          quote pipeline (legacy alias /api/qi/quotes)
    /contact         contact form (legacy alias /api/qi/contact)
"""

from __future__ import annotations

from fastapi import APIRouter

from oregonchem_api.adapters.routers import contact_router, health_router, quotes_router

router = APIRouter()

for child, prefix, tags in (
    (health_router.router, "/health", ["Health"]),
    (health_router.summary_router, "", ["Health"]),
    (quotes_router.router, "", None),
    (contact_router.router, "", None),
):
    router.include_router(child, prefix=prefix, tags=tags)
