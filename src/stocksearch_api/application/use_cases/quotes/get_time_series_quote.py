# src/stocksearch_api/application/use_cases/quotes/get_time_series_quote.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Use Case: Get Time-Series Quote

Purpose:
    Fetch the two most recent bars for a symbol and reduce them to one
    normalized quote with derived change and percent.

Layer: application/use_cases
"""

from __future__ import annotations

import logging
from typing import Final

from stocksearch_api.application.interfaces.quote_sources import TimeSeriesSource
from stocksearch_api.domain.entities.quote import NormalizedQuote
from stocksearch_api.domain.services.quote_normalizer import QuoteNormalizer

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL: Final[str] = "1day"
LATEST_BARS: Final[int] = 2


class GetTimeSeriesQuote:
    """Use case returning the latest bar of a time series as a quote.

    Args:
        source: Raw time-series source (e.g., the Twelve Data client).
        normalizer: Shared stateless normalizer.
    """

    def __init__(self, source: TimeSeriesSource, normalizer: QuoteNormalizer | None = None) -> None:
        self._source = source
        self._normalizer = normalizer or QuoteNormalizer()

    async def execute(self, symbol: str, interval: str = DEFAULT_INTERVAL) -> NormalizedQuote:
        """Fetch and normalize.

        Raises:
            ProviderError: Provider answered with an explicit error status.
            NotFoundError: No bars were returned.
            ParseError: A close price is not a finite number.
        """
        raw = await self._source.time_series(symbol, interval, outputsize=LATEST_BARS)
        quote = self._normalizer.normalize_time_series(raw, symbol=symbol, interval=interval)
        logger.debug(
            "time_series_quote_normalized",
            extra={"symbol": quote.symbol, "interval": quote.interval},
        )
        return quote
