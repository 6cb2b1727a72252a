# src/stocksearch_api/infrastructure/external_apis/workflow/client.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Workflow webhook transport client (AI analysis, chart rendering).

Both webhooks are POSTs that may trigger paid or slow work downstream, so
they are never retried. Non-success responses keep the upstream status and
text so the router can relay them.
"""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx

from stocksearch_api.domain.entities.chart import DEFAULT_CHART_MEDIA_TYPE, ChartImage
from stocksearch_api.domain.exceptions.workflow import WorkflowError, WorkflowUnavailable
from stocksearch_api.infrastructure.external_apis.workflow.settings import WorkflowSettings
from stocksearch_api.infrastructure.logging.logger import get_json_logger, get_request_id
from stocksearch_api.infrastructure.observability.metrics_market_data import (
    get_upstream_http_status_total,
    observe_upstream_request,
)

_logger: logging.Logger = get_json_logger(__name__)

_PROVIDER: Final[str] = "workflow"


class WorkflowClient:
    """Async client for the workflow-automation webhooks."""

    def __init__(self, settings: WorkflowSettings, *, http: httpx.AsyncClient | None = None) -> None:
        self._base_url = settings.base_url.rstrip("/")
        self._analysis_path = settings.analysis_path
        self._chart_path = settings.chart_path
        self._timeout = float(settings.timeout_s)
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout)
        self._status_total = get_upstream_http_status_total()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def request_analysis(self, payload: Any) -> str:
        """Forward ``payload`` to the analysis webhook and return its text body."""
        response = await self._post(op="analysis", path=self._analysis_path, payload=payload)
        return response.text

    async def render_chart(self, payload: Any) -> ChartImage:
        """Post a chart request and return the rendered bytes."""
        response = await self._post(op="chart", path=self._chart_path, payload=payload)
        media_type = response.headers.get("Content-Type") or DEFAULT_CHART_MEDIA_TYPE
        return ChartImage(content=response.content, media_type=media_type)

    async def _post(self, *, op: str, path: str, payload: Any) -> httpx.Response:
        headers: dict[str, str] = {}
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id

        with observe_upstream_request(provider=_PROVIDER, endpoint=op) as obs:
            try:
                response = await self._client.post(
                    f"{self._base_url}{path}",
                    json=payload,
                    headers=headers,
                    timeout=self._timeout,
                )
            except httpx.RequestError as exc:
                _logger.warning(
                    "workflow_unreachable",
                    extra={"endpoint": op, "reason": type(exc).__name__},
                )
                raise WorkflowUnavailable(
                    "Workflow service is unreachable",
                    details={"endpoint": op, "reason": type(exc).__name__},
                ) from exc

            self._status_total.labels(
                provider=_PROVIDER, endpoint=op, status_code=str(response.status_code)
            ).inc()

            if not response.is_success:
                obs.mark_error(f"http_{response.status_code}")
                _logger.warning(
                    "workflow_call_failed",
                    extra={"endpoint": op, "status": response.status_code},
                )
                raise WorkflowError(
                    response.text or f"Workflow responded with {response.status_code}",
                    details={"status": response.status_code},
                )
            return response
