# src/stocksearch_api/dependencies/providers.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Dependency wiring for quote providers and workflow webhooks.

Overview:
    FastAPI dependency providers yielding fully wired use cases for the quote
    and workflow routers.

Layer:
    dependencies

Design:
    * Provider settings are derived from the canonical ``Settings`` through
      this module's ``get_settings`` shim, so tests can monkeypatch it.
    * Clients reuse the lifespan-owned ``httpx.AsyncClient`` on
      ``app.state.http_client`` when present; otherwise each request gets a
      private client that is closed after the response.
    * One stateless ``QuoteNormalizer`` is shared by every request.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import httpx
from fastapi import Request

from stocksearch_api.application.use_cases.quotes.get_global_quote import GetGlobalQuote
from stocksearch_api.application.use_cases.quotes.get_time_series_quote import (
    GetTimeSeriesQuote,
)
from stocksearch_api.application.use_cases.workflows.render_chart import RenderChart
from stocksearch_api.application.use_cases.workflows.request_stock_analysis import (
    RequestStockAnalysis,
)
from stocksearch_api.domain.services.quote_normalizer import QuoteNormalizer
from stocksearch_api.infrastructure.external_apis.alphavantage.client import AlphaVantageClient
from stocksearch_api.infrastructure.external_apis.alphavantage.settings import (
    AlphaVantageSettings,
)
from stocksearch_api.infrastructure.external_apis.twelvedata.client import TwelveDataClient
from stocksearch_api.infrastructure.external_apis.twelvedata.settings import TwelveDataSettings
from stocksearch_api.infrastructure.external_apis.workflow.client import WorkflowClient
from stocksearch_api.infrastructure.external_apis.workflow.settings import WorkflowSettings

_NORMALIZER = QuoteNormalizer()


def get_settings() -> Any:
    """Shim for tests to patch settings resolution in this module."""
    from stocksearch_api.config.settings import get_settings as core_get_settings

    return core_get_settings()


# =============================================================================
# Settings adapters
# =============================================================================


def _load_alphavantage_settings() -> AlphaVantageSettings:
    import stocksearch_api.dependencies.providers as deps

    settings = deps.get_settings()
    return AlphaVantageSettings(
        base_url=settings.alphavantage_base_url,
        api_key=settings.alphavantage_api_key,
        timeout_s=settings.provider_timeout_s,
        max_retries=settings.provider_max_retries,
    )


def _load_twelvedata_settings() -> TwelveDataSettings:
    import stocksearch_api.dependencies.providers as deps

    settings = deps.get_settings()
    return TwelveDataSettings(
        base_url=settings.twelvedata_base_url,
        api_key=settings.twelvedata_api_key,
        timeout_s=settings.provider_timeout_s,
        max_retries=settings.provider_max_retries,
    )


def _load_workflow_settings() -> WorkflowSettings:
    import stocksearch_api.dependencies.providers as deps

    settings = deps.get_settings()
    return WorkflowSettings(
        base_url=settings.workflow_base_url,
        analysis_path=settings.workflow_analysis_path,
        chart_path=settings.workflow_chart_path,
        timeout_s=settings.workflow_timeout_s,
    )


def _shared_http_client(request: Request) -> httpx.AsyncClient | None:
    """Return the lifespan-owned HTTP client, if the app was started with one."""
    return getattr(request.app.state, "http_client", None)


# =============================================================================
# Use case dependencies
# =============================================================================


async def get_global_quote_use_case(request: Request) -> AsyncGenerator[GetGlobalQuote, None]:
    """Yield a GetGlobalQuote wired to the Alpha Vantage client."""
    client = AlphaVantageClient(_load_alphavantage_settings(), http=_shared_http_client(request))
    try:
        yield GetGlobalQuote(client, _NORMALIZER)
    finally:
        await client.aclose()


async def get_time_series_quote_use_case(
    request: Request,
) -> AsyncGenerator[GetTimeSeriesQuote, None]:
    """Yield a GetTimeSeriesQuote wired to the Twelve Data client."""
    client = TwelveDataClient(_load_twelvedata_settings(), http=_shared_http_client(request))
    try:
        yield GetTimeSeriesQuote(client, _NORMALIZER)
    finally:
        await client.aclose()


async def get_stock_analysis_use_case(
    request: Request,
) -> AsyncGenerator[RequestStockAnalysis, None]:
    """Yield a RequestStockAnalysis wired to the workflow webhook client."""
    client = WorkflowClient(_load_workflow_settings(), http=_shared_http_client(request))
    try:
        yield RequestStockAnalysis(client)
    finally:
        await client.aclose()


async def get_render_chart_use_case(request: Request) -> AsyncGenerator[RenderChart, None]:
    """Yield a RenderChart wired to the workflow webhook client."""
    client = WorkflowClient(_load_workflow_settings(), http=_shared_http_client(request))
    try:
        yield RenderChart(client)
    finally:
        await client.aclose()
