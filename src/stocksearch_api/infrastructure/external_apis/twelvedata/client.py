# src/stocksearch_api/infrastructure/external_apis/twelvedata/client.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Twelve Data transport client (``time_series``).

Twelve Data reports most request errors with HTTP 200 and a
``{"status": "error"}`` body; those pass through to the normalizer.
"""

from __future__ import annotations

from typing import Any

import httpx

from stocksearch_api.infrastructure.external_apis.base_client import QuoteProviderClient
from stocksearch_api.infrastructure.external_apis.twelvedata.settings import TwelveDataSettings
from stocksearch_api.infrastructure.resilience.retry import RetryPolicy


class TwelveDataClient(QuoteProviderClient):
    """Resilient, instrumented transport client for Twelve Data."""

    provider = "twelvedata"

    def __init__(
        self,
        settings: TwelveDataSettings,
        *,
        http: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.base_url,
            api_key=settings.api_key,
            timeout_s=settings.timeout_s,
            max_retries=settings.max_retries,
            http=http,
            retry_policy=retry_policy,
        )
        self._outputsize = settings.outputsize

    async def time_series(self, symbol: str, interval: str, *, outputsize: int | None = None) -> Any:
        """Call ``/time_series`` for the most recent bars of one symbol.

        Args:
            symbol: Ticker.
            interval: Provider interval label (e.g., ``"1day"``).
            outputsize: Bars to request; defaults to the configured size (2).

        Returns:
            The decoded JSON body.
        """
        params = {
            "symbol": symbol,
            "interval": interval,
            "outputsize": outputsize or self._outputsize,
            "apikey": self._require_api_key(),
        }
        return await self._get_json(op="time_series", path="/time_series", params=params)
