# src/stocksearch_api/infrastructure/external_apis/alphavantage/client.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Alpha Vantage transport client (``GLOBAL_QUOTE``).

Return shape: the decoded JSON body, untouched. Advisory notes, empty
wrappers and schema checks are the normalizer's concern.
"""

from __future__ import annotations

from typing import Any

import httpx

from stocksearch_api.infrastructure.external_apis.alphavantage.settings import (
    AlphaVantageSettings,
)
from stocksearch_api.infrastructure.external_apis.base_client import QuoteProviderClient
from stocksearch_api.infrastructure.resilience.retry import RetryPolicy


class AlphaVantageClient(QuoteProviderClient):
    """Resilient, instrumented transport client for Alpha Vantage."""

    provider = "alphavantage"

    def __init__(
        self,
        settings: AlphaVantageSettings,
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

    async def global_quote(self, symbol: str) -> Any:
        """Call ``/query?function=GLOBAL_QUOTE`` for one symbol.

        Args:
            symbol: Ticker as requested by the caller (passed through as-is).

        Returns:
            The decoded JSON body.

        Raises:
            ProviderNotConfigured: If no API key is configured.
        """
        params = {
            "function": "GLOBAL_QUOTE",
            "symbol": symbol,
            "apikey": self._require_api_key(),
        }
        return await self._get_json(op="global_quote", path="/query", params=params)
