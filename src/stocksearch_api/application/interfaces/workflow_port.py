# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Application Port: workflow-automation webhooks."""

from __future__ import annotations

from typing import Any, Protocol

from stocksearch_api.domain.entities.chart import ChartImage


class WorkflowPort(Protocol):
    """Webhooks producing AI analysis text and chart images.

    Implementations raise ``WorkflowError`` on non-success responses and
    ``WorkflowUnavailable`` when the webhook cannot be reached.
    """

    async def request_analysis(self, payload: Any) -> str:
        """Forward ``payload`` and return the analysis text verbatim."""

    async def render_chart(self, payload: Any) -> ChartImage:
        """Request a chart rendering and return the image bytes."""
