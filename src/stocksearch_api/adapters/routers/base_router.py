# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Base Router (Adapters Layer)

Purpose:
    Provide a canonical APIRouter wrapper and shared utilities for StockSearch
    HTTP endpoints:
      - Stable prefixes (e.g., "/api").
      - Standard error response mapping using ErrorEnvelope.
      - Helpers to emit presenter results with headers (X-Request-ID).

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from stocksearch_api.adapters.presenters.base_presenter import PresentResult
from stocksearch_api.adapters.schemas.http.envelopes import ErrorEnvelope
from stocksearch_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

TagType = str | Enum


def request_trace_id(request: Request) -> str | None:
    """Return the correlation id assigned by RequestIdMiddleware, if any."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


class BaseRouter(APIRouter):
    """Canonical router wrapper for StockSearch HTTP endpoints.

    Args:
        prefix: Path prefix applied to every route (e.g., "/api").
        tags: Default tags applied to all routes mounted on this router.
        dependencies: Optional global dependencies for all routes.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        prefix: str = "",
        tags: Sequence[TagType] | None = None,
        dependencies: Sequence[Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            prefix=prefix,
            tags=list(tags) if tags is not None else None,
            dependencies=list(dependencies) if dependencies is not None else None,
            **kwargs,
        )
        _LOGGER.debug(
            "router_initialized",
            extra={"prefix": prefix, "tags": [str(t) for t in tags or []]},
        )

    # -------------------------------------------------------------------------
    # Response helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def send_error(result: PresentResult[ErrorEnvelope]) -> JSONResponse:
        """Render an error presenter result (bypasses response_model)."""
        body = result.body
        content = body.model_dump_http() if body is not None else {}
        return JSONResponse(
            status_code=result.status_code or 500,
            content=content,
            headers=dict(result.headers),
        )

    # -------------------------------------------------------------------------
    # OpenAPI Error Responses
    # -------------------------------------------------------------------------

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        """Return the canonical error response mapping for endpoints.

        Use in routes via:

            responses=BaseRouter.std_error_responses()
        """
        return {
            400: {"model": ErrorEnvelope, "description": "Bad request (validation or parameter)."},
            404: {"model": ErrorEnvelope, "description": "Symbol not found."},
            422: {"model": ErrorEnvelope, "description": "Unprocessable content."},
            429: {"model": ErrorEnvelope, "description": "Upstream rate limit exceeded."},
            500: {"model": ErrorEnvelope, "description": "Internal server error."},
            502: {"model": ErrorEnvelope, "description": "Upstream returned an invalid response."},
            503: {"model": ErrorEnvelope, "description": "Upstream unavailable or not configured."},
        }
