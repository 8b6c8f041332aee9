"""HTTP routers; ``api_router`` aggregates everything except ``/metrics``."""

from __future__ import annotations

from .api_router import router as api_router

__all__ = ["api_router"]
