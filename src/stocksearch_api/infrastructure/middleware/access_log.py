# src/stocksearch_api/infrastructure/middleware/access_log.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Access Log Middleware.

Emits one ``access_log`` record per request. Quote routes carry the ticker in
the path (``/api/price/IBM``), so records are keyed by the matched route
template (``/api/price/{symbol}``); the ticker itself is logged separately as
``symbol`` when the route has one, from the path or the query string.

Fields: ``method``, ``route``, ``path``, ``symbol``, ``status``,
``elapsed_ms``, ``request_id``, ``outcome`` (``ok`` / ``client_error`` /
``upstream_error`` / ``server_error``).
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from stocksearch_api.infrastructure.logging.logger import get_json_logger

_logger: logging.Logger = get_json_logger(__name__)

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """Return the matched route template, or a fixed marker for unmatched paths."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) else UNMATCHED_ROUTE


def classify_status(status: int) -> str:
    """Bucket a response status for dashboards."""
    if status < 400:
        return "ok"
    if status in (502, 503):
        return "upstream_error"
    if status < 500:
        return "client_error"
    return "server_error"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured, low-cardinality access logging."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        t0 = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            symbol = request.path_params.get("symbol") or request.query_params.get("symbol")
            record: dict[str, Any] = {
                "method": request.method,
                "route": route_template(request),
                "path": request.url.path,
                "symbol": symbol,
                "status": status,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000.0, 2),
                "request_id": getattr(request.state, "request_id", None),
                "outcome": classify_status(status),
            }
            _logger.info("access_log", extra=record)
