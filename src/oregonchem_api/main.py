# src/oregonchem_api/main.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
Oregonchem API application.

``create_app()`` assembles the service: envelope-shaped exception handlers,
request-id/access-log/gzip/CORS middleware, the quote, contact and health
routers and ``/metrics``. The lifespan opens the database and the shared HTTP
client. ``app`` is the eager instance uvicorn serves.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware
from starlette.requests import Request
from starlette.responses import Response

from oregonchem_api.adapters.routers import api_router
from oregonchem_api.adapters.routers.metrics_router import router as metrics_router
from oregonchem_api.config.settings import Settings, get_settings
from oregonchem_api.dependencies.core.bootstrap import bootstrap
from oregonchem_api.domain.exceptions.base import DomainError
from oregonchem_api.infrastructure.http.errors import (
    handle_domain_error,
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)
from oregonchem_api.infrastructure.logging.logger import configure_root_logging, get_json_logger
from oregonchem_api.infrastructure.middleware.access_log import AccessLogMiddleware
from oregonchem_api.infrastructure.middleware.request_id import RequestIdMiddleware

configure_root_logging()
logger = get_json_logger(__name__)

Handler = Callable[[Request, Any], Awaitable[Response]]

#: Most specific first; Starlette resolves handlers along the exception MRO.
EXCEPTION_HANDLERS: tuple[tuple[type[Exception], Handler], ...] = (
    (RequestValidationError, handle_validation_error),
    (StarletteHTTPException, handle_http_exception),
    (DomainError, handle_domain_error),
    (Exception, handle_unhandled_exception),
)


def operation_id(route: APIRoute) -> str:
    """``<methods>_<path>`` with separators flattened, e.g. ``get__quotes_quote_id``."""
    methods = ",".join(sorted(route.methods or ())).lower()
    path = route.path_format.translate(str.maketrans({"/": "_", "{": None, "}": None}))
    return f"{methods}_{path.lower()}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with bootstrap(app) as state:
        app.state.settings = state.settings
        app.state.http_client = state.http_client
        yield


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    origins = settings.effective_cors_origins
    # Added last runs first: CORS wraps everything, request id wraps the access log.
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=bool(origins) and "*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


def create_app() -> FastAPI:
    settings = get_settings()
    version = settings.service_version or "0.0.0"

    app = FastAPI(
        title="Oregonchem API",
        version=version,
        description="Quote requests, PDF quotations and notifications for Química Industrial Perú.",
        lifespan=lifespan,
        generate_unique_id_function=operation_id,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
    )
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)
    _install_middleware(app, settings)

    app.include_router(api_router)
    app.include_router(metrics_router)

    logger.info(
        "service_startup",
        extra={
            "extra": {
                "service": settings.service_name,
                "environment": settings.environment.value,
                "version": version,
                "cors_origins": settings.effective_cors_origins,
            }
        },
    )
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "oregonchem_api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3001")),
    )
