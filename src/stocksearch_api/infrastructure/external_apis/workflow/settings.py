# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the workflow webhook client."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Configuration for the workflow-automation webhook (analysis, chart).

    Environment variables (with ``model_config.env_prefix``):

    * ``WORKFLOW_BASE_URL``
    * ``WORKFLOW_ANALYSIS_PATH``
    * ``WORKFLOW_CHART_PATH``
    * ``WORKFLOW_TIMEOUT_S``
    """

    base_url: str = Field(
        "http://localhost:5678",
        description="Base URL of the webhook host.",
    )
    analysis_path: str = Field(
        "/webhook-test/stock-analysis",
        description="Path of the analysis webhook.",
    )
    chart_path: str = Field(
        "/webhook-test/chart",
        description="Path of the chart-rendering webhook.",
    )
    timeout_s: float = Field(
        60.0,
        description="Per-request timeout in seconds; analysis runs can be slow.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        extra="ignore",
    )
