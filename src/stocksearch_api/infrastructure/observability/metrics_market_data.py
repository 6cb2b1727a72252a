# src/stocksearch_api/infrastructure/observability/metrics_market_data.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Upstream provider observability helpers and Prometheus metrics.

This module centralizes all Prometheus metrics related to external providers
(Alpha Vantage, Twelve Data, the workflow webhook).

Exports
-------
* ``stocksearch_upstream_latency_seconds`` (Histogram)
* ``stocksearch_upstream_errors_total`` (Counter)
* ``stocksearch_upstream_http_status_total`` (Counter)
* ``stocksearch_upstream_retries_total`` (Counter)

Helpers:

* :func:`observe_upstream_request` - context manager for one upstream call.
* ``get_*`` accessors returning the underlying collector.

Design
------
Collectors are created against the *current* default registry
(:data:`prometheus_client.REGISTRY`). If a collector with the same name
already exists there, the existing instance is reused instead of registering
a duplicate, so module re-imports in tests are safe.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry


def _get_or_create_histogram(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Histogram:
    """Return a histogram bound to the current default registry.

    Args:
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Optional iterable of label names.

    Returns:
        A :class:`Histogram` bound to the current :data:`prom.REGISTRY`.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    existing = mapping.get(name)
    if isinstance(existing, Histogram):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return Histogram(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            again = getattr(registry, "_names_to_collectors", {}).get(name)
            if isinstance(again, Histogram):
                return again
        raise


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Counter:
    """Return a counter bound to the current default registry.

    Mirrors :func:`_get_or_create_histogram` for :class:`Counter` collectors.
    Counters are looked up under their ``_total`` sample name as well, which is
    how ``prometheus_client`` indexes them.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    base = name[: -len("_total")] if name.endswith("_total") else name
    existing = mapping.get(name) or mapping.get(base)
    if isinstance(existing, Counter):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return Counter(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(base)
            if isinstance(again, Counter):
                return again
        raise


# ---------------------------------------------------------------------------
# Core metrics
# ---------------------------------------------------------------------------

upstream_latency_seconds: Histogram = _get_or_create_histogram(
    "stocksearch_upstream_latency_seconds",
    "Latency of upstream provider calls (seconds).",
    labelnames=("provider", "endpoint", "outcome"),
)

upstream_errors_total: Counter = _get_or_create_counter(
    "stocksearch_upstream_errors_total",
    "Total errors encountered when calling upstream providers.",
    labelnames=("provider", "endpoint", "reason"),
)

upstream_http_status_total: Counter = _get_or_create_counter(
    "stocksearch_upstream_http_status_total",
    "HTTP status codes returned by upstream providers.",
    labelnames=("provider", "endpoint", "status_code"),
)

upstream_retries_total: Counter = _get_or_create_counter(
    "stocksearch_upstream_retries_total",
    "Retries attempted for upstream provider requests.",
    labelnames=("provider", "endpoint", "reason"),
)


def get_upstream_latency_seconds() -> Histogram:
    """Return the upstream latency histogram."""
    return upstream_latency_seconds


def get_upstream_errors_total() -> Counter:
    """Return the upstream error counter."""
    return upstream_errors_total


def get_upstream_http_status_total() -> Counter:
    """Return the upstream HTTP status counter."""
    return upstream_http_status_total


def get_upstream_retries_total() -> Counter:
    """Return the upstream retries counter."""
    return upstream_retries_total


# ---------------------------------------------------------------------------
# Observation context manager used by provider clients
# ---------------------------------------------------------------------------


@dataclass
class UpstreamObservation:
    """State captured while observing an upstream call.

    Attributes:
        provider: Upstream provider identifier (for labelling).
        endpoint: Logical endpoint name (for labelling).
        start: Monotonic start time in seconds.
        outcome: Outcome of the call (``"success"`` or ``"error"``).
        error_reason: Short, machine-readable error reason if any.
    """

    provider: str
    endpoint: str
    start: float = field(default_factory=perf_counter)
    outcome: str = "success"
    error_reason: str | None = None

    def mark_error(self, reason: str) -> None:
        """Mark the upstream call as failed with a given reason."""
        self.outcome = "error"
        self.error_reason = reason


@contextmanager
def observe_upstream_request(
    *,
    provider: str,
    endpoint: str,
) -> Generator[UpstreamObservation, None, None]:
    """Observe one upstream request.

    Records a latency sample and, when the body raises or calls
    :meth:`UpstreamObservation.mark_error`, an error increment labelled with
    the exception class name (or the explicit reason).

    Args:
        provider: Upstream provider identifier (e.g. ``"alphavantage"``).
        endpoint: Logical endpoint name (e.g. ``"global_quote"``).

    Yields:
        The mutable observation record.
    """
    obs = UpstreamObservation(provider=provider, endpoint=endpoint)
    try:
        yield obs
    except Exception as exc:
        obs.mark_error(type(exc).__name__)
        raise
    finally:
        elapsed = perf_counter() - obs.start
        upstream_latency_seconds.labels(
            provider=provider, endpoint=endpoint, outcome=obs.outcome
        ).observe(elapsed)
        if obs.error_reason is not None:
            upstream_errors_total.labels(
                provider=provider, endpoint=endpoint, reason=obs.error_reason
            ).inc()
