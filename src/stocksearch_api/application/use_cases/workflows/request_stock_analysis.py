# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Use Case: Request Stock Analysis

Purpose:
    Relay a client-supplied analysis request to the workflow webhook and
    return the produced text unchanged.

Layer: application/use_cases
"""

from __future__ import annotations

from typing import Any

from stocksearch_api.application.interfaces.workflow_port import WorkflowPort


class RequestStockAnalysis:
    """Pass-through use case for the AI analysis webhook."""

    def __init__(self, workflow: WorkflowPort) -> None:
        self._workflow = workflow

    async def execute(self, payload: Any) -> str:
        return await self._workflow.request_analysis(payload)
