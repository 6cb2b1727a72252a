# src/stocksearch_api/adapters/routers/api_router.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""API Router Aggregator (Adapters Layer).

Responsibilities:
    • Mount the banner at `/` and health endpoints under `/health`.
    • Mount quote endpoints under `/api/price*`.
    • Mount workflow endpoints under `/api/stock-analysis` and `/api/chart`.

Layer:
    adapters/routers
"""

from __future__ import annotations

from fastapi import APIRouter

from stocksearch_api.adapters.routers.health_router import root_router
from stocksearch_api.adapters.routers.health_router import router as health_router
from stocksearch_api.adapters.routers.quotes_router import router as quotes_router
from stocksearch_api.adapters.routers.workflows_router import router as workflows_router

router = APIRouter()

router.include_router(root_router)

# Health endpoints (liveness) under /health.
router.include_router(health_router, prefix="/health", tags=["Health"])

# BaseRouter already carries the /api prefix.
router.include_router(quotes_router)
router.include_router(workflows_router)
