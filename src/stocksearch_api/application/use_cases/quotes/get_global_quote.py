# src/stocksearch_api/application/use_cases/quotes/get_global_quote.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Use Case: Get Global Quote

Purpose:
    Fetch a single "global quote" from the configured source and normalize it.
    Nothing is cached; every call reaches the provider.

Layer: application/use_cases
"""

from __future__ import annotations

import logging

from stocksearch_api.application.interfaces.quote_sources import GlobalQuoteSource
from stocksearch_api.domain.entities.quote import NormalizedQuote
from stocksearch_api.domain.services.quote_normalizer import QuoteNormalizer

logger = logging.getLogger(__name__)


class GetGlobalQuote:
    """Use case returning the latest flat quote for one symbol.

    Args:
        source: Raw global-quote source (e.g., the Alpha Vantage client).
        normalizer: Shared stateless normalizer.

    Raises:
        NotFoundError: Provider has no data for the symbol.
        MarketDataValidationError: Provider payload has an unexpected shape.
    """

    def __init__(self, source: GlobalQuoteSource, normalizer: QuoteNormalizer | None = None) -> None:
        self._source = source
        self._normalizer = normalizer or QuoteNormalizer()

    async def execute(self, symbol: str) -> NormalizedQuote:
        raw = await self._source.global_quote(symbol)
        quote = self._normalizer.normalize_global_quote(raw)
        logger.debug("global_quote_normalized", extra={"symbol": quote.symbol})
        return quote
