# src/stocksearch_api/config/settings.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""StockSearch Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated application configuration for the StockSearch API. Only
    the dependency layer and infrastructure read this object; provider clients
    receive their own narrow settings built from it.

Design:
    - Pydantic v2 BaseSettings with `extra='ignore'` so a shared `.env` with
      the frontend does not break startup.
    - Explicit field declarations with constrained ranges.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor `get_settings()` with LRU cache.
    - Safe, structured logging (no secrets).
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed application configuration for StockSearch."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )
    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="TCP port used when the service is started directly.",
        validation_alias="PORT",
    )

    # Raw env for CORS; the parsed list is computed in a model validator.
    cors_allow_origins_raw: str | None = Field(
        default=None,
        description="Raw env for allowed CORS origins (comma-separated).",
        validation_alias="ALLOWED_ORIGINS",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description=(
            "Allowed CORS origins. Derived from ALLOWED_ORIGINS; defaults to '*' in "
            "development/test and to no cross-origin access elsewhere. An explicit "
            "'*' is rejected in production-like envs."
        ),
    )

    # ---------------------------
    # Service identity / logging
    # ---------------------------
    service_name: str = Field(
        default="stocksearch-api",
        description="Logical service name for logging.",
        validation_alias="SERVICE_NAME",
    )
    service_version: str | None = Field(
        default=None,
        description="Service version reported in OpenAPI and startup logs.",
        validation_alias="SERVICE_VERSION",
    )
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO').",
        validation_alias="LOG_LEVEL",
    )

    # ---------------------------
    # Quote providers
    # ---------------------------
    alphavantage_api_key: SecretStr | None = Field(
        default=None,
        description="Alpha Vantage API key (global quote provider).",
        validation_alias="AV_API_KEY",
    )
    alphavantage_base_url: str = Field(
        default="https://www.alphavantage.co",
        description="Alpha Vantage base URL.",
        validation_alias="ALPHAVANTAGE_BASE_URL",
    )
    twelvedata_api_key: SecretStr | None = Field(
        default=None,
        description="Twelve Data API key (time series provider).",
        validation_alias="TWELVEDATA_API_KEY",
    )
    twelvedata_base_url: str = Field(
        default="https://api.twelvedata.com",
        description="Twelve Data base URL.",
        validation_alias="TWELVEDATA_BASE_URL",
    )
    provider_timeout_s: float = Field(
        default=8.0,
        ge=0.1,
        le=60.0,
        description="Per-request timeout in seconds for quote provider calls.",
        validation_alias="PROVIDER_TIMEOUT_S",
    )
    provider_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Max retries for transient quote provider failures.",
        validation_alias="PROVIDER_MAX_RETRIES",
    )

    # ---------------------------
    # Workflow webhook (analysis / chart)
    # ---------------------------
    workflow_base_url: str = Field(
        default="http://localhost:5678",
        description="Base URL of the workflow-automation webhook host.",
        validation_alias="WORKFLOW_BASE_URL",
    )
    workflow_analysis_path: str = Field(
        default="/webhook-test/stock-analysis",
        description="Webhook path producing the AI stock analysis.",
        validation_alias="WORKFLOW_ANALYSIS_PATH",
    )
    workflow_chart_path: str = Field(
        default="/webhook-test/chart",
        description="Webhook path rendering a chart image.",
        validation_alias="WORKFLOW_CHART_PATH",
    )
    workflow_timeout_s: float = Field(
        default=60.0,
        ge=0.1,
        le=600.0,
        description="Per-request timeout in seconds for workflow webhook calls.",
        validation_alias="WORKFLOW_TIMEOUT_S",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _compute_cors(self) -> Settings:
        """Compute the CORS list from the raw env value.

        Unset or blank means '*' in development/test and an empty list
        (same-origin only) in every other environment.

        Raises:
            ValueError: If '*' is requested outside development/test.
        """
        raw = (self.cors_allow_origins_raw or "").strip()
        entries = [e.strip() for e in raw.split(",") if e.strip()]
        if any(e == "*" for e in entries) and self.environment not in (
            Environment.DEVELOPMENT,
            Environment.TEST,
        ):
            raise ValueError(
                "'*' CORS origin is only allowed in development/test environments.",
            )
        if not entries and self.environment in (Environment.DEVELOPMENT, Environment.TEST):
            entries = ["*"]
        self.cors_allow_origins = entries
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "Settings initialized",
        extra={
            "environment": settings.environment.value,
            "cors_count": len(settings.cors_allow_origins),
            "cors_has_wildcard": any(o == "*" for o in settings.cors_allow_origins),
            "alphavantage_key_set": settings.alphavantage_api_key is not None,
            "twelvedata_key_set": settings.twelvedata_api_key is not None,
            "provider_timeout_s": settings.provider_timeout_s,
            "provider_max_retries": settings.provider_max_retries,
            "workflow_base_url": settings.workflow_base_url,
        },
    )
    return settings
