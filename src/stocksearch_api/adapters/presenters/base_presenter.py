# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Presenter utilities and canonical envelope helpers.

Purpose:
    Thin, framework-aware helpers used by routers to consistently shape HTTP
    responses and headers.

Responsibilities:
    * Build ErrorEnvelope instances from domain exceptions.
    * Own the domain-error -> HTTP status table.
    * Apply standard headers such as X-Request-ID.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

from fastapi import Response

from stocksearch_api.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject
from stocksearch_api.domain.exceptions.base import DomainError
from stocksearch_api.domain.exceptions.market_data import (
    MarketDataRateLimited,
    MarketDataUnavailable,
    MarketDataValidationError,
    NotFoundError,
    ParseError,
    ProviderError,
    ProviderNotConfigured,
)
from stocksearch_api.domain.exceptions.workflow import WorkflowError, WorkflowUnavailable

# Most specific first: MarketDataRateLimited must win over ProviderError.
DOMAIN_ERROR_STATUS: Final[tuple[tuple[type[DomainError], int], ...]] = (
    (NotFoundError, 404),
    (MarketDataRateLimited, 429),
    (ProviderError, 502),
    (ParseError, 502),
    (MarketDataValidationError, 502),
    (MarketDataUnavailable, 503),
    (ProviderNotConfigured, 503),
    (WorkflowUnavailable, 503),
)

_DEFAULT_ERROR_STATUS: Final[int] = 500

T = TypeVar("T")


def http_status_for(exc: DomainError) -> int:
    """Return the HTTP status for a domain exception."""
    if isinstance(exc, WorkflowError):
        return exc.upstream_status
    for exc_type, status in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return _DEFAULT_ERROR_STATUS


@dataclass(slots=True)
class PresentResult(Generic[T]):
    """Presentation result envelope.

    Attributes:
        body: A Pydantic model instance, or ``None``.
        headers: Extra HTTP headers to apply.
        status_code: Optional HTTP status override.
    """

    body: T | None
    headers: Mapping[str, str]
    status_code: int | None = None


class BasePresenter:
    """Base presenter for HTTP response shaping in adapter layers."""

    def present_error(
        self,
        *,
        code: str,
        http_status: int,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> PresentResult[ErrorEnvelope]:
        """Build an ErrorEnvelope and attach ``X-Request-ID``."""
        err = ErrorObject(
            code=code,
            http_status=http_status,
            message=message,
            details=details or {},
            trace_id=trace_id,
        )
        headers: dict[str, str] = {}
        if trace_id:
            headers["X-Request-ID"] = trace_id
        return PresentResult(body=ErrorEnvelope(error=err), headers=headers, status_code=http_status)

    def present_domain_error(
        self, exc: DomainError, *, trace_id: str | None = None
    ) -> PresentResult[ErrorEnvelope]:
        """Map a domain exception onto the canonical error envelope."""
        return self.present_error(
            code=exc.code,
            http_status=http_status_for(exc),
            message=exc.message,
            trace_id=trace_id,
            details=exc.details,
        )

    @staticmethod
    def apply_headers(result: PresentResult[Any], response: Response) -> None:
        """Apply headers and optional status code to the outgoing response."""
        response.headers.update(dict(result.headers))
        if result.status_code is not None:
            response.status_code = result.status_code
