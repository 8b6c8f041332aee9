# src/oregonchem_api/config/settings.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Application settings.

All values come from the process environment (and ``.env`` when present).
Mail, company and logo settings carry working defaults, so a bare
environment only needs ``DATABASE_URL``. Use cases never read settings
directly; ``dependencies/`` passes them the values they need.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

BUNDLED_LOGO_PATH: Path = (
    Path(__file__).resolve().parents[1] / "infrastructure" / "assets" / "logo.png"
)

#: Environments in which a ``*`` CORS origin is tolerated.
_OPEN_CORS_ENVIRONMENTS = frozenset({"development", "test"})


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


def _env(name: str, default: Any = None, **constraints: Any) -> Any:
    """Field bound to the environment variable ``name``."""
    return Field(default, validation_alias=name, **constraints)


class Settings(BaseSettings):
    """Typed configuration for the quotes API."""

    model_config = SettingsConfigDict(env_file=".env", extra="forbid", case_sensitive=False)

    # Runtime
    environment: Environment = _env("ENVIRONMENT", Environment.DEVELOPMENT)
    database_url: str = _env("DATABASE_URL", ...)
    db_schema: str | None = _env("DB_SCHEMA")
    service_name: str = _env("SERVICE_NAME", "oregonchem-api")
    service_version: str | None = _env("SERVICE_VERSION")
    log_level: str | None = _env("LOG_LEVEL")
    docs_url: str | None = _env("DOCS_URL", "/docs")
    openapi_url: str | None = _env("OPENAPI_URL", "/openapi.json")

    # Comma-separated in ALLOWED_ORIGINS; parsed into cors_allow_origins.
    cors_allow_origins_raw: str | None = _env("ALLOWED_ORIGINS")
    cors_allow_origins: list[str] = Field(default_factory=list)

    # SMTP
    smtp_host: str = _env("SMTP_HOST", "localhost")
    smtp_port: int = _env("SMTP_PORT", 587, ge=1, le=65535)
    smtp_secure: bool = _env("SMTP_SECURE", False)
    smtp_user: str | None = _env("SMTP_USER")
    smtp_password: SecretStr | None = _env("SMTP_PASSWORD")
    smtp_timeout_s: float = _env("SMTP_TIMEOUT_S", 30.0, ge=0.5, le=300.0)
    mail_from: str = _env("SMTP_FROM", "contacto@quimicaindustrial.pe")

    # Letterhead and mail signature
    company_name: str = _env("COMPANY_NAME", "Química Industrial Perú")
    company_address: str = _env("COMPANY_ADDRESS", "Av. Industrial 123, Lima, Perú")
    company_phone: str = _env("COMPANY_PHONE", "+51 1 123 4567")
    company_email: str = _env("COMPANY_EMAIL", "contacto@quimicaindustrial.pe")

    # Recipient rules, see application/services/recipient_policy.py
    email_redirect_all_to: str | None = _env("EMAIL_REDIRECT_ALL_TO")
    allow_email_redirect_in_prod: bool = _env("ALLOW_EMAIL_REDIRECT_IN_PROD", False)
    quote_company_to: str | None = _env("QUOTE_COMPANY_TO")
    quote_client_to: str | None = _env("QUOTE_CLIENT_TO")
    contact_company_to: str | None = _env("CONTACT_COMPANY_TO")
    contact_client_to: str | None = _env("CONTACT_CLIENT_TO")

    # Logo chain: local path, then remote URL, then the bundled file
    company_logo_path: str | None = _env("COMPANY_LOGO_PATH")
    company_logo_url: str = _env("COMPANY_LOGO_URL", "https://quimicaindustrial.pe/logo.png")
    company_logo_fallback_path: str = _env("COMPANY_LOGO_FALLBACK_PATH", str(BUNDLED_LOGO_PATH))
    logo_fetch_timeout_s: float = _env("LOGO_FETCH_TIMEOUT_S", 5.0, ge=0.1, le=60.0)

    # Submission policy
    quote_require_products: bool = _env("QUOTE_REQUIRE_PRODUCTS", True)
    quote_unknown_product_name: str = _env("QUOTE_UNKNOWN_PRODUCT_NAME", "Producto desconocido")

    @model_validator(mode="after")
    def _parse_cors(self) -> Settings:
        origins = [o.strip() for o in (self.cors_allow_origins_raw or "").split(",") if o.strip()]
        if "*" in origins and self.environment.value not in _OPEN_CORS_ENVIRONMENTS:
            raise ValueError(
                f"wildcard CORS origin is not allowed in {self.environment.value!r}"
            )
        self.cors_allow_origins = origins
        return self

    @property
    def is_production(self) -> bool:
        return self.environment is Environment.PRODUCTION

    @property
    def effective_cors_origins(self) -> list[str]:
        """Origins handed to the CORS middleware.

        Unset ``ALLOWED_ORIGINS`` opens CORS in development and test only;
        elsewhere it means no cross-origin access.
        """
        if self.cors_allow_origins:
            return list(self.cors_allow_origins)
        return ["*"] if self.environment.value in _OPEN_CORS_ENVIRONMENTS else []

    def log_summary(self) -> dict[str, Any]:
        """Non-secret view of the settings for the startup log."""
        return {
            "environment": self.environment.value,
            "db_schema": self.db_schema,
            "cors_origins": len(self.cors_allow_origins),
            "smtp_host": self.smtp_host,
            "smtp_port": self.smtp_port,
            "smtp_secure": self.smtp_secure,
            "smtp_auth": bool(self.smtp_user and self.smtp_password),
            "mail_redirect": bool(self.email_redirect_all_to),
            "logo_local": bool(self.company_logo_path),
            "quote_require_products": self.quote_require_products,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        RuntimeError: The environment does not validate.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.error("settings_invalid", extra={"extra": {"errors": exc.error_count()}})
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
    logger.info("settings_loaded", extra={"extra": settings.log_summary()})
    return settings
