# src/stocksearch_api/infrastructure/external_apis/base_client.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Shared JSON transport for quote providers - resilient, instrumented, async.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) with per-request timeout.
* Jittered exponential retries (bounded) for 429, 5xx and network failures;
  honors ``Retry-After`` seconds up to the backoff cap.
* Deterministic mapping to domain errors (429/4xx/5xx/non-JSON).
* Correlation propagation (``X-Request-ID``) on outbound calls.
* Prometheus metrics for latency, status codes, errors and retries.

Provider subclasses only build paths and query parameters.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Final

import httpx
from pydantic import SecretStr

from stocksearch_api.domain.exceptions.market_data import (
    MarketDataRateLimited,
    MarketDataUnavailable,
    MarketDataValidationError,
    ProviderError,
    ProviderNotConfigured,
)
from stocksearch_api.domain.services.quote_normalizer import advisory_note
from stocksearch_api.infrastructure.logging.logger import (
    get_json_logger,
    get_request_id,
    get_trace_id,
)
from stocksearch_api.infrastructure.observability.metrics_market_data import (
    get_upstream_http_status_total,
    get_upstream_retries_total,
    observe_upstream_request,
)
from stocksearch_api.infrastructure.resilience.retry import RetryPolicy, retry_async

_logger: logging.Logger = get_json_logger(__name__)

DEFAULT_TIMEOUT: Final[float] = 8.0
DEFAULT_BASE_BACKOFF: Final[float] = 0.25
DEFAULT_MAX_BACKOFF: Final[float] = 2.5

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "User-Agent": "stocksearch-api/1.0",
}


def parse_retry_after(val: str | None) -> float | None:
    """Parse the HTTP ``Retry-After`` header (seconds form only).

    Args:
        val: Header value as a string, or ``None``.

    Returns:
        The seconds to wait as a float if parseable, otherwise ``None``.
    """
    if not val:
        return None
    try:
        return max(0.0, float(val))
    except ValueError:
        return None


def _vendor_message(response: httpx.Response) -> str | None:
    """Best-effort extraction of a vendor error message from a JSON body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, Mapping):
        return None
    message = body.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return advisory_note(body)


def _is_retryable(exc: Exception) -> bool:
    return isinstance(exc, (MarketDataRateLimited, MarketDataUnavailable))


class QuoteProviderClient:
    """Base transport client for JSON quote providers.

    Subclasses set :attr:`provider` and call :meth:`_get_json`.
    """

    provider: ClassVar[str] = "upstream"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: SecretStr | None,
        timeout_s: float | None = None,
        max_retries: int = 2,
        http: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            base_url: Provider base URL (no trailing slash needed).
            api_key: Provider API key; ``None`` or blank refuses every call.
            timeout_s: Per-request timeout in seconds (default ``8.0``).
            max_retries: Retries after the first attempt for transient errors.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            retry_policy: Optional explicit retry configuration.
        """
        self._base_url = str(base_url).rstrip("/")
        self._api_key = api_key
        self._timeout = float(timeout_s) if timeout_s is not None else DEFAULT_TIMEOUT
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS.copy(),
        )
        self._retry = retry_policy or RetryPolicy(
            total=max(0, int(max_retries)),
            base=DEFAULT_BASE_BACKOFF,
            cap=DEFAULT_MAX_BACKOFF,
            jitter=True,
        )
        self._status_total = get_upstream_http_status_total()
        self._retries_total = get_upstream_retries_total()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # --------------------------- Internal helpers ------------------------- #

    def _require_api_key(self) -> str:
        """Return the API key or raise when it is not configured."""
        key = self._api_key.get_secret_value().strip() if self._api_key is not None else ""
        if not key:
            raise ProviderNotConfigured(
                f"{self.provider} API key is not configured",
                details={"provider": self.provider},
            )
        return key

    def _outbound_headers(self) -> dict[str, str]:
        headers = dict(_DEFAULT_HEADERS)
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if trace_id:
            headers["x-trace-id"] = trace_id
        return headers

    async def _get_json(self, *, op: str, path: str, params: Mapping[str, Any]) -> Any:
        """GET ``path`` with retry and metrics, returning the decoded JSON body.

        Raises:
            MarketDataUnavailable: Network error, timeout, or upstream 5xx.
            MarketDataRateLimited: Upstream 429 after retries are exhausted.
            ProviderError: Any other upstream 4xx.
            MarketDataValidationError: The body is not JSON.
        """
        url = f"{self._base_url}{path}"
        headers = self._outbound_headers()

        async def _call() -> Any:
            try:
                response = await self._client.get(
                    url, params=params, headers=headers, timeout=self._timeout
                )
            except httpx.RequestError as exc:
                raise MarketDataUnavailable(
                    f"{self.provider} is unreachable",
                    details={"provider": self.provider, "reason": type(exc).__name__},
                ) from exc

            self._status_total.labels(
                provider=self.provider, endpoint=op, status_code=str(response.status_code)
            ).inc()

            try:
                self._map_errors(response)
            except (MarketDataRateLimited, MarketDataUnavailable):
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                if retry_after:
                    await asyncio.sleep(min(retry_after, self._retry.cap))
                raise

            try:
                return response.json()
            except ValueError as exc:
                raise MarketDataValidationError(
                    "non_json", details={"provider": self.provider, "error": str(exc)}
                ) from exc

        def _on_retry(exc: Exception, attempt: int) -> None:
            self._retries_total.labels(
                provider=self.provider, endpoint=op, reason=type(exc).__name__
            ).inc()
            _logger.info(
                "upstream_retry",
                extra={"provider": self.provider, "endpoint": op, "attempt": attempt + 1},
            )

        with observe_upstream_request(provider=self.provider, endpoint=op):
            try:
                return await retry_async(
                    _call, policy=self._retry, retry_on=_is_retryable, on_retry=_on_retry
                )
            except (ProviderError, MarketDataUnavailable, MarketDataValidationError) as exc:
                _logger.warning(
                    "upstream_call_failed",
                    extra={"provider": self.provider, "endpoint": op, **exc.log_fields()},
                )
                raise

    def _map_errors(self, response: httpx.Response) -> None:
        """Raise domain exceptions for retryable and terminal HTTP statuses."""
        status = response.status_code
        if status < 400:
            return
        details: dict[str, Any] = {"provider": self.provider, "status": status}
        if status == 429:
            raise MarketDataRateLimited(f"{self.provider} rate limit exceeded", details=details)
        if status >= 500:
            raise MarketDataUnavailable(f"{self.provider} is unavailable", details=details)
        message = _vendor_message(response)
        if message:
            details["message"] = message
        raise ProviderError(message or f"{self.provider} rejected the request", details=details)
