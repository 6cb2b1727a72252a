# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Presenter: NormalizedQuote -> flat HTTP quote body.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from stocksearch_api.adapters.presenters.base_presenter import BasePresenter, PresentResult
from stocksearch_api.adapters.schemas.http.quotes import QuoteHTTP
from stocksearch_api.domain.entities.quote import NormalizedQuote


class QuotesPresenter(BasePresenter):
    """Presenter for ``/api/price*`` responses."""

    def present_quote(
        self, quote: NormalizedQuote, *, trace_id: str | None = None
    ) -> PresentResult[QuoteHTTP]:
        """Render a quote; quotes are never cached so ``Cache-Control: no-store``."""
        body = QuoteHTTP(
            symbol=quote.symbol,
            open=quote.open,
            high=quote.high,
            low=quote.low,
            price=quote.price,
            volume=quote.volume,
            latest_day=quote.latest_day,
            previous_close=quote.previous_close,
            change=quote.change,
            percent=quote.percent,
            interval=quote.interval,
            currency=quote.currency,
            exchange=quote.exchange,
            timezone=quote.timezone,
        )
        headers = {"Cache-Control": "no-store"}
        if trace_id:
            headers["X-Request-ID"] = trace_id
        return PresentResult(body=body, headers=headers)
