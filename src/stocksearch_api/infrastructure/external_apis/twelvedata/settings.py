# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the Twelve Data transport client."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TwelveDataSettings(BaseSettings):
    """Configuration for the Twelve Data ``time_series`` client.

    Environment variables (with ``model_config.env_prefix``):

    * ``TWELVEDATA_BASE_URL``
    * ``TWELVEDATA_API_KEY``
    * ``TWELVEDATA_TIMEOUT_S``
    * ``TWELVEDATA_MAX_RETRIES``
    * ``TWELVEDATA_OUTPUTSIZE``
    """

    base_url: str = Field(
        "https://api.twelvedata.com",
        description="Base URL for the Twelve Data API.",
    )
    api_key: SecretStr | None = Field(
        None,
        description="Twelve Data API key; calls are refused when unset.",
    )
    timeout_s: float = Field(
        8.0,
        description="Per-request timeout in seconds for the transport client.",
    )
    max_retries: int = Field(
        2,
        description="Maximum number of retry attempts for retryable failures.",
    )
    outputsize: int = Field(
        2,
        ge=2,
        description="Bars requested per call; two are needed to derive change.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="TWELVEDATA_",
        extra="ignore",
    )
