# src/oregonchem_api/infrastructure/middleware/access_log.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""One ``http_access`` log line per request.

The client address follows the same rule as quote provenance: first
``X-Forwarded-For`` hop, else the socket peer. A request whose handler raised
is logged with status 500 and ``ok=false`` before the exception continues.
"""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.client.host if request.client else None


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "http_access",
                extra={
                    "extra": {
                        "method": request.method,
                        "path": request.url.path,
                        "query": request.url.query or None,
                        "status": status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                        "client_ip": _client_ip(request),
                        "ok": status_code < 500,
                    }
                },
            )
