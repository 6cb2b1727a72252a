# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Use Case: Render Chart

Purpose:
    Build the chart request for an exchange-qualified symbol and return the
    rendered image from the workflow webhook.

Layer: application/use_cases
"""

from __future__ import annotations

from typing import Any, Final

from stocksearch_api.application.interfaces.workflow_port import WorkflowPort
from stocksearch_api.domain.entities.chart import ChartImage

MAX_SYMBOL_LENGTH: Final[int] = 10
CHART_THEME: Final[str] = "dark"
CHART_STUDIES: Final[tuple[str, ...]] = (
    "Bollinger Bands",
    "Volume",
    "Relative Strength Index",
)


def build_chart_request(symbol: str, exchange: str) -> dict[str, Any]:
    """Return the webhook body for ``EXCHANGE:SYMBOL`` with the standard studies.

    The length limit applies to ``symbol`` as received, surrounding whitespace
    included; the blank check and the payload use the stripped values.

    Raises:
        ValueError: If ``symbol`` is blank or longer than ten characters, or
            ``exchange`` is blank.
    """
    if len(symbol) > MAX_SYMBOL_LENGTH:
        raise ValueError(f"symbol must be 1..{MAX_SYMBOL_LENGTH} characters")
    symbol = symbol.strip()
    exchange = exchange.strip()
    if not symbol:
        raise ValueError(f"symbol must be 1..{MAX_SYMBOL_LENGTH} characters")
    if not exchange:
        raise ValueError("exchange is required")
    return {
        "symbol": f"{exchange}:{symbol}",
        "theme": CHART_THEME,
        "studies": [{"name": name} for name in CHART_STUDIES],
    }


class RenderChart:
    """Use case producing a chart image for one listing."""

    def __init__(self, workflow: WorkflowPort) -> None:
        self._workflow = workflow

    async def execute(self, symbol: str, exchange: str) -> ChartImage:
        return await self._workflow.render_chart(build_chart_request(symbol, exchange))
