# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Quotes Router.

Synopsis:
    HTTP surface for the latest quote of one symbol from either provider:

    * ``GET /api/price/{symbol}`` - Alpha Vantage global quote.
    * ``GET /api/price-twelve?symbol=&interval=`` - Twelve Data time series
      reduced to its latest bar.

Design:
    * Presentation-only: delegates to the use case, shapes the flat body.
    * Domain errors are rendered as the canonical error envelope.
    * Nothing is cached; responses carry ``Cache-Control: no-store``.

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Path, Query, Request, Response, status

from stocksearch_api.adapters.presenters.quotes_presenter import QuotesPresenter
from stocksearch_api.adapters.routers.base_router import BaseRouter, request_trace_id
from stocksearch_api.adapters.schemas.http.quotes import QuoteHTTP
from stocksearch_api.application.use_cases.quotes.get_global_quote import GetGlobalQuote
from stocksearch_api.application.use_cases.quotes.get_time_series_quote import (
    DEFAULT_INTERVAL,
    GetTimeSeriesQuote,
)
from stocksearch_api.dependencies.providers import (
    get_global_quote_use_case,
    get_time_series_quote_use_case,
)
from stocksearch_api.domain.exceptions.base import DomainError

router = BaseRouter(prefix="/api", tags=["Quotes"])
_presenter = QuotesPresenter()


@router.get(
    "/price/{symbol}",
    response_model=QuoteHTTP,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Get the latest global quote for a symbol",
)
async def get_price(
    request: Request,
    response: Response,
    symbol: Annotated[str, Path(min_length=1, max_length=32, description="Ticker symbol")],
    uc: Annotated[GetGlobalQuote, Depends(get_global_quote_use_case)],
) -> Any:
    trace_id = request_trace_id(request)
    try:
        quote = await uc.execute(symbol)
    except DomainError as exc:
        return BaseRouter.send_error(_presenter.present_domain_error(exc, trace_id=trace_id))

    result = _presenter.present_quote(quote, trace_id=trace_id)
    _presenter.apply_headers(result, response)
    return result.body


@router.get(
    "/price-twelve",
    response_model=QuoteHTTP,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Get the latest bar of a time series as a quote",
)
async def get_price_twelve(
    request: Request,
    response: Response,
    symbol: Annotated[str, Query(min_length=1, max_length=32, description="Ticker symbol")],
    uc: Annotated[GetTimeSeriesQuote, Depends(get_time_series_quote_use_case)],
    interval: Annotated[
        str, Query(min_length=1, max_length=16, description="Bar interval, e.g. 1day, 1h")
    ] = DEFAULT_INTERVAL,
) -> Any:
    """Return the latest bar with change/percent derived from the previous close."""
    trace_id = request_trace_id(request)
    try:
        quote = await uc.execute(symbol, interval)
    except DomainError as exc:
        return BaseRouter.send_error(_presenter.present_domain_error(exc, trace_id=trace_id))

    result = _presenter.present_quote(quote, trace_id=trace_id)
    _presenter.apply_headers(result, response)
    return result.body
