# src/stocksearch_api/adapters/schemas/http/envelopes.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""HTTP Envelopes (Adapters Layer).

Purpose:
    Canonical transport-facing error envelope used by every route and by the
    global exception handlers:

        {"error": {"code", "http_status", "message", "details", "trace_id"}}

    Success bodies are not enveloped; the quote routes return the flat
    quote object the frontend reads directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stocksearch_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = [
    "ErrorObject",
    "ErrorEnvelope",
]


class ErrorObject(BaseModel):
    """Structured error object inside ErrorEnvelope.

    Error codes are UPPER_SNAKE_CASE and stable across releases, e.g.
    ``SYMBOL_NOT_FOUND``, ``MARKET_DATA_RATE_LIMITED``, ``WORKFLOW_ERROR``,
    ``VALIDATION_ERROR``.
    """

    model_config = ConfigDict(
        title="ErrorObject",
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "code": "SYMBOL_NOT_FOUND",
                    "http_status": 404,
                    "message": "No data found for symbol",
                    "details": {"note": None},
                    "trace_id": "req-123",
                }
            ]
        },
    )

    code: str = Field(..., description="Stable machine-readable error code.")
    http_status: int = Field(..., description="Associated HTTP status.")
    message: str = Field(..., description="Human-readable error description.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional structured details safe for clients.",
    )
    trace_id: str | None = Field(
        default=None,
        description="Request correlation identifier.",
    )


class ErrorEnvelope(BaseHTTPSchema):
    r"""Canonical error envelope: {"error": ErrorObject}."""

    model_config = ConfigDict(
        title="ErrorEnvelope",
        extra="forbid",
    )

    error: ErrorObject = Field(..., description="Structured error details.")
