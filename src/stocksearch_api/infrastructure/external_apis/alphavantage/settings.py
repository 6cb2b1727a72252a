# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the Alpha Vantage transport client."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AlphaVantageSettings(BaseSettings):
    """Configuration for the Alpha Vantage ``GLOBAL_QUOTE`` client.

    Environment variables (with ``model_config.env_prefix``):

    * ``ALPHAVANTAGE_BASE_URL``
    * ``ALPHAVANTAGE_API_KEY``
    * ``ALPHAVANTAGE_TIMEOUT_S``
    * ``ALPHAVANTAGE_MAX_RETRIES``

    The application normally builds this from the canonical ``Settings``
    (which reads ``AV_API_KEY``) instead of letting it read env directly.
    """

    base_url: str = Field(
        "https://www.alphavantage.co",
        description="Base URL for the Alpha Vantage API.",
    )
    api_key: SecretStr | None = Field(
        None,
        description="Alpha Vantage API key; calls are refused when unset.",
    )
    timeout_s: float = Field(
        8.0,
        description="Per-request timeout in seconds for the transport client.",
    )
    max_retries: int = Field(
        2,
        description="Maximum number of retry attempts for retryable failures.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="ALPHAVANTAGE_",
        extra="ignore",
    )
