# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Workflow Webhook Domain Exceptions.

Synopsis:
    Errors raised when the workflow-automation webhook (AI analysis, chart
    rendering) fails. Mapped to HTTP envelopes by adapters.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from stocksearch_api.domain.exceptions.base import DomainError


class WorkflowError(DomainError):
    """The webhook answered with a non-success status.

    ``details["status"]`` holds the upstream HTTP status and the message holds
    the upstream error text.
    """

    code = "WORKFLOW_ERROR"

    @property
    def upstream_status(self) -> int:
        """Return the upstream HTTP status, defaulting to 502."""
        status = self.details.get("status")
        return status if isinstance(status, int) else 502


class WorkflowUnavailable(DomainError):
    """The webhook could not be reached or timed out."""

    code = "WORKFLOW_UNAVAILABLE"
