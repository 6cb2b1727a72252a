# src/stocksearch_api/adapters/routers/metrics_router.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Prometheus scrape endpoint (`/metrics`).

Layer:
    adapters/routers
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

# Registers the upstream collectors before the first scrape.
from stocksearch_api.infrastructure.observability import metrics_market_data  # noqa: F401

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics_probe() -> Response:
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
