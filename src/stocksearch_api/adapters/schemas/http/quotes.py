# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Quotes.

Synopsis:
    Flat quote body returned by ``/api/price/{symbol}`` and
    ``/api/price-twelve``. Field names on the wire are camelCase
    (``latestDay``, ``previousClose``); the time-series meta fields are
    omitted when absent.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from stocksearch_api.adapters.schemas.http.base import BaseHTTPSchema


class QuoteHTTP(BaseHTTPSchema):
    """HTTP schema for one normalized quote."""

    # Upstream strings are passed through verbatim.
    model_config = ConfigDict(str_strip_whitespace=False)

    symbol: str = Field(description="Ticker symbol", examples=["IBM"])
    open: str = Field(description="Opening price", examples=["170.0000"])
    high: str = Field(description="Session high", examples=["172.5000"])
    low: str = Field(description="Session low", examples=["169.1000"])
    price: str = Field(description="Latest price", examples=["171.2000"])
    volume: str | None = Field(
        default=None, description="Traded volume if reported", examples=["3456789"]
    )
    latest_day: str = Field(
        alias="latestDay", description="Latest trading day", examples=["2024-05-10"]
    )
    previous_close: str = Field(
        alias="previousClose", description="Previous close", examples=["170.2000"]
    )
    change: str = Field(description="Change versus previous close", examples=["1.0000"])
    percent: str = Field(description="Percent change with % suffix", examples=["0.5875%"])
    interval: str | None = Field(default=None, description="Bar interval", examples=["1day"])
    currency: str | None = Field(default=None, description="Quote currency", examples=["USD"])
    exchange: str | None = Field(default=None, description="Listing exchange", examples=["NYSE"])
    timezone: str | None = Field(
        default=None, description="Exchange timezone", examples=["America/New_York"]
    )
