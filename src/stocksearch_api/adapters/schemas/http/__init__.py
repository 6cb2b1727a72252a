# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. BaseHTTPSchema stays
    internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from stocksearch_api.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject
from stocksearch_api.adapters.schemas.http.quotes import QuoteHTTP
from stocksearch_api.adapters.schemas.http.workflows import AnalysisRequest

__all__ = ["AnalysisRequest", "ErrorEnvelope", "ErrorObject", "QuoteHTTP"]
