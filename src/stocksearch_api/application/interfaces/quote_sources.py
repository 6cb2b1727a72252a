# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Application Ports: raw quote sources.

Use cases depend on these protocols rather than on concrete HTTP clients, so
tests can hand in fakes returning canned provider payloads.

Design:
    * Sources return the *decoded, un-normalized* provider body.
    * Transport failures surface as domain exceptions
      (:mod:`stocksearch_api.domain.exceptions.market_data`).
"""

from __future__ import annotations

from typing import Any, Protocol


class GlobalQuoteSource(Protocol):
    """Source of "global quote" payloads (one flat record per symbol)."""

    async def global_quote(self, symbol: str) -> Any:
        """Return the raw provider body for ``symbol``."""


class TimeSeriesSource(Protocol):
    """Source of "time series" payloads (newest bar first)."""

    async def time_series(
        self, symbol: str, interval: str, *, outputsize: int | None = None
    ) -> Any:
        """Return the raw provider body for ``symbol`` at ``interval``."""
