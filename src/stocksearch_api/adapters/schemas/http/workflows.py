# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Workflow requests.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from stocksearch_api.adapters.schemas.http.base import BaseHTTPSchema


class AnalysisRequest(BaseHTTPSchema):
    """Body of ``POST /api/stock-analysis``.

    Only ``symbol`` is documented; any additional keys are forwarded to the
    analysis webhook untouched.
    """

    model_config = ConfigDict(extra="allow")

    symbol: str | None = Field(default=None, description="Ticker to analyse", examples=["AAPL"])
