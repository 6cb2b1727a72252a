# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Market Data Domain Exceptions.

Synopsis:
    Domain-level exceptions representing error conditions when interacting with
    external quote providers or normalizing their payloads. These are raised in
    domain/application and mapped to canonical HTTP envelopes by adapters.

Design:
    * Inherit from :class:`DomainError` for consistent `.code` and safety.
    * Keep HTTP concerns out of the domain; map in presenters.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from stocksearch_api.domain.exceptions.base import DomainError


class NotFoundError(DomainError):
    """Upstream has no data for the requested symbol.

    Raised for an empty or missing quote wrapper, or an empty/missing bar
    sequence. The message carries the vendor advisory note when one exists.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "SYMBOL_NOT_FOUND"


class ProviderError(DomainError):
    """Upstream explicitly rejected the request (bad parameters, rate limit).

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "PROVIDER_ERROR"


class ParseError(DomainError):
    """A value expected to be numeric could not be parsed.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "UPSTREAM_PARSE_ERROR"


class MarketDataValidationError(DomainError):
    """Upstream returned an unexpected or invalid payload shape.

    Indicates schema drift, missing required fields, or non-JSON bodies.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "UPSTREAM_SCHEMA_ERROR"


class MarketDataUnavailable(DomainError):
    """Third-party market data dependency is unavailable or timed out.

    Typical causes:
        * Network errors / timeouts
        * Upstream 5xx

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "MARKET_DATA_UNAVAILABLE"


class MarketDataRateLimited(ProviderError):
    """Upstream rate limit was hit; retry after cool-down.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "MARKET_DATA_RATE_LIMITED"


class ProviderNotConfigured(DomainError):
    """The provider cannot be called because its credentials are missing.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "PROVIDER_NOT_CONFIGURED"
