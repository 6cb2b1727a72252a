# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Workflow Router (AI analysis, chart rendering).

Synopsis:
    * ``POST /api/stock-analysis`` relays the JSON body to the analysis webhook
      and returns the produced text as a JSON string.
    * ``POST /api/chart?symbol=&exchange=`` asks the chart webhook for an
      ``EXCHANGE:SYMBOL`` chart and relays the image bytes.

Upstream failures keep the upstream status and text in the error envelope.

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response

from stocksearch_api.adapters.presenters.base_presenter import BasePresenter
from stocksearch_api.adapters.routers.base_router import BaseRouter, request_trace_id
from stocksearch_api.adapters.schemas.http.workflows import AnalysisRequest
from stocksearch_api.application.use_cases.workflows.render_chart import (
    MAX_SYMBOL_LENGTH,
    RenderChart,
)
from stocksearch_api.application.use_cases.workflows.request_stock_analysis import (
    RequestStockAnalysis,
)
from stocksearch_api.dependencies.providers import (
    get_render_chart_use_case,
    get_stock_analysis_use_case,
)
from stocksearch_api.domain.exceptions.base import DomainError

router = BaseRouter(prefix="/api", tags=["Workflows"])
_presenter = BasePresenter()


@router.post(
    "/stock-analysis",
    response_model=str,
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Request an AI stock analysis",
)
async def post_stock_analysis(
    request: Request,
    body: Annotated[AnalysisRequest, Body()],
    uc: Annotated[RequestStockAnalysis, Depends(get_stock_analysis_use_case)],
) -> Any:
    trace_id = request_trace_id(request)
    try:
        text = await uc.execute(body.model_dump(mode="json", exclude_unset=True))
    except DomainError as exc:
        return BaseRouter.send_error(_presenter.present_domain_error(exc, trace_id=trace_id))
    return JSONResponse(content=text)


@router.post(
    "/chart",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "Rendered chart image."},
        **BaseRouter.std_error_responses(),
    },
    summary="Render a chart for an exchange-qualified symbol",
)
async def post_chart(
    request: Request,
    symbol: Annotated[
        str, Query(min_length=1, max_length=MAX_SYMBOL_LENGTH, description="Ticker symbol")
    ],
    exchange: Annotated[str, Query(min_length=1, description="Exchange code, e.g. NASDAQ")],
    uc: Annotated[RenderChart, Depends(get_render_chart_use_case)],
) -> Response:
    trace_id = request_trace_id(request)
    try:
        chart = await uc.execute(symbol, exchange)
    except ValueError as exc:
        return BaseRouter.send_error(
            _presenter.present_error(
                code="VALIDATION_ERROR",
                http_status=status.HTTP_400_BAD_REQUEST,
                message=str(exc),
                trace_id=trace_id,
            )
        )
    except DomainError as exc:
        return BaseRouter.send_error(_presenter.present_domain_error(exc, trace_id=trace_id))
    return Response(content=chart.content, media_type=chart.media_type)
