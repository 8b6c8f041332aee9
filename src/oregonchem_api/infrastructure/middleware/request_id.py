# src/oregonchem_api/infrastructure/middleware/request_id.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Request correlation ids.

A well-formed inbound ``X-Request-ID`` is kept, anything else is replaced by a
fresh UUID4. The id is stored on ``request.state.request_id``, bound to the
logging context and echoed on the response. Error envelopes expose it as
``trace_id``.
"""

from __future__ import annotations

import re
import uuid
from typing import Final

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from oregonchem_api.infrastructure.logging.logger import set_request_context

REQUEST_ID_HEADER: Final = "X-Request-ID"
_ACCEPTED: Final = re.compile(r"[\w.:@-]{1,128}", re.ASCII)


def resolve_request_id(inbound: str | None) -> str:
    """Return ``inbound`` when it is a safe token, else a new UUID4 string."""
    if inbound and _ACCEPTED.fullmatch(inbound):
        return inbound
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        set_request_context(request_id=rid)
        response = await call_next(request)
        response.headers.setdefault(REQUEST_ID_HEADER, rid)
        return response
