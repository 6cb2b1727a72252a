# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Quote normalization service.

Purpose:
    Turn raw decoded JSON from the two supported quote providers into a single
    canonical :class:`NormalizedQuote`:

    * "Global quote" payloads (Alpha Vantage ``GLOBAL_QUOTE``) are remapped
      field by field; change and percent are passed through untouched.
    * "Time series" payloads (Twelve Data ``time_series``) are reduced to the
      latest bar; change and percent are derived from the two most recent
      closes.

Layer:
    domain/services

Notes:
    - Pure domain logic: no logging, no HTTP, no metrics, no shared state.
    - Closes are parsed as :class:`decimal.Decimal`; anything that does not
      parse to a finite number raises :class:`ParseError`.
    - Derived values are rounded half-up to two places.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, Overflow
from typing import Any, Final

from stocksearch_api.domain.entities.quote import NormalizedQuote
from stocksearch_api.domain.exceptions.market_data import (
    MarketDataValidationError,
    NotFoundError,
    ParseError,
    ProviderError,
)

GLOBAL_QUOTE_KEY: Final[str] = "Global Quote"

# Provider A wrapper keys -> NormalizedQuote field names.
GLOBAL_QUOTE_FIELDS: Final[Mapping[str, str]] = {
    "01. symbol": "symbol",
    "02. open": "open",
    "03. high": "high",
    "04. low": "low",
    "05. price": "price",
    "06. volume": "volume",
    "07. latest trading day": "latest_day",
    "08. previous close": "previous_close",
    "09. change": "change",
    "10. change percent": "percent",
}

# Top-level keys provider A uses for advisory notes (rate limit, bad symbol).
ADVISORY_NOTE_KEYS: Final[tuple[str, ...]] = ("Note", "Information", "Error Message")

NO_DATA_MESSAGE: Final[str] = "No data found for symbol"
INVALID_REQUEST_MESSAGE: Final[str] = "Invalid request"

DEFAULT_CURRENCY: Final[str] = "USD"
DEFAULT_EXCHANGE: Final[str] = "Unknown"
DEFAULT_TIMEZONE: Final[str] = "UTC"

_BAR_TEXT_FIELDS: Final[tuple[str, ...]] = ("datetime", "open", "high", "low")

_TWO_PLACES: Final[Decimal] = Decimal("0.01")
_HUNDRED: Final[Decimal] = Decimal("100")
_ZERO: Final[Decimal] = Decimal("0")
_DECIMAL_CTX: Final[Context] = Context(prec=34, rounding=ROUND_HALF_UP)


def advisory_note(raw: Mapping[str, Any]) -> str | None:
    """Return the first non-empty vendor advisory note in ``raw``, if any."""
    for key in ADVISORY_NOTE_KEYS:
        note = raw.get(key)
        if isinstance(note, str) and note.strip():
            return note.strip()
    return None


def parse_decimal(value: Any, *, field: str) -> Decimal:
    """Parse an upstream numeric string into a finite :class:`Decimal`.

    Args:
        value: Raw value from the provider (normally a string).
        field: Field name used in error details.

    Returns:
        The parsed decimal.

    Raises:
        ParseError: If the value is missing, non-numeric, or not finite.
    """
    if isinstance(value, bool) or value is None:
        raise ParseError(f"{field} is not numeric", details={"field": field, "value": value})
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ParseError(
            f"{field} is not numeric", details={"field": field, "value": str(value)}
        ) from exc
    if not parsed.is_finite():
        raise ParseError(f"{field} is not finite", details={"field": field, "value": str(value)})
    return parsed


def format_two_places(value: Decimal) -> str:
    """Round half-up to two places and render without exponent or negative zero."""
    rounded = value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_DECIMAL_CTX)
    if rounded.is_zero():
        rounded = abs(rounded)
    return format(rounded, "f")


def derive_change(latest_close: Decimal, previous_close: Decimal) -> tuple[str, str]:
    """Return ``(change, percent)`` strings for two consecutive closes.

    A previous close of zero yields ``"0.00%"`` instead of dividing.

    Raises:
        ParseError: If the closes are too large or too small to render with
            two fractional digits.
    """
    try:
        delta = _DECIMAL_CTX.subtract(latest_close, previous_close)
        change = format_two_places(delta)
        if previous_close.is_zero():
            return change, "0.00%"
        ratio = _DECIMAL_CTX.multiply(_DECIMAL_CTX.divide(delta, previous_close), _HUNDRED)
        return change, f"{format_two_places(ratio)}%"
    except (InvalidOperation, Overflow) as exc:
        raise ParseError(
            "close is out of range",
            details={
                "field": "close",
                "value": str(latest_close),
                "previous_close": str(previous_close),
            },
        ) from exc


class QuoteNormalizer:
    """Stateless normalizer for provider quote payloads.

    Instances hold no state; one may be shared freely across requests and
    tasks.
    """

    __slots__ = ()

    # ------------------------------------------------------------------ #
    # Provider A: global quote
    # ------------------------------------------------------------------ #

    def normalize_global_quote(self, raw: Mapping[str, Any]) -> NormalizedQuote:
        """Remap a "global quote" payload onto :class:`NormalizedQuote`.

        Args:
            raw: Decoded JSON body from provider A.

        Returns:
            The normalized quote; every field copied verbatim.

        Raises:
            NotFoundError: If the wrapper object is absent or empty. The
                message is the vendor advisory note when present.
            MarketDataValidationError: If the payload or wrapper is not an
                object, a field is missing, or a value is not a string.
        """
        if not isinstance(raw, Mapping):
            raise MarketDataValidationError("bad_shape", details={"expected": "object"})

        wrapper = raw.get(GLOBAL_QUOTE_KEY)
        if not wrapper:
            note = advisory_note(raw)
            raise NotFoundError(note or NO_DATA_MESSAGE, details={"note": note})
        if not isinstance(wrapper, Mapping):
            raise MarketDataValidationError(
                "bad_shape", details={"expected": f"{GLOBAL_QUOTE_KEY}:object"}
            )

        missing = sorted(key for key in GLOBAL_QUOTE_FIELDS if key not in wrapper)
        if missing:
            raise MarketDataValidationError("missing_fields", details={"missing": missing})

        fields: dict[str, str] = {}
        for key, name in GLOBAL_QUOTE_FIELDS.items():
            value = wrapper[key]
            if not isinstance(value, str):
                raise MarketDataValidationError(
                    "bad_values", details={"field": key, "expected": "string"}
                )
            fields[name] = value

        return NormalizedQuote(**fields)

    # ------------------------------------------------------------------ #
    # Provider B: time series
    # ------------------------------------------------------------------ #

    def normalize_time_series(
        self,
        raw: Mapping[str, Any],
        *,
        symbol: str | None = None,
        interval: str | None = None,
    ) -> NormalizedQuote:
        """Reduce a "time series" payload to its latest bar and derive change.

        Args:
            raw: Decoded JSON body from provider B.
            symbol: Requested symbol, used when the meta block omits it.
            interval: Requested interval, used when the meta block omits it.

        Returns:
            The normalized quote including interval/currency/exchange/timezone.

        Raises:
            ProviderError: If the payload carries ``status == "error"``.
            NotFoundError: If ``values`` is missing, not a list, or empty.
            ParseError: If a close price is missing or not a finite number.
            MarketDataValidationError: On malformed meta or bar objects.
        """
        if not isinstance(raw, Mapping):
            raise MarketDataValidationError("bad_shape", details={"expected": "object"})

        if raw.get("status") == "error":
            message = raw.get("message")
            raise ProviderError(
                message if isinstance(message, str) and message else INVALID_REQUEST_MESSAGE,
                details={"code": raw.get("code")},
            )

        values = raw.get("values")
        if not isinstance(values, list) or not values:
            raise NotFoundError(NO_DATA_MESSAGE, details={"symbol": symbol})

        meta = raw.get("meta") or {}
        if not isinstance(meta, Mapping):
            raise MarketDataValidationError("bad_shape", details={"expected": "meta:object"})

        latest = self._bar(values, 0)
        previous = self._bar(values, 1) if len(values) > 1 else latest

        latest_close = parse_decimal(latest.get("close"), field="close")
        previous_close = parse_decimal(previous.get("close"), field="previous_close")
        change, percent = derive_change(latest_close, previous_close)

        resolved_symbol = _text(meta.get("symbol")) or symbol
        if not resolved_symbol:
            raise MarketDataValidationError("missing_fields", details={"missing": ["meta.symbol"]})

        volume = latest.get("volume")
        return NormalizedQuote(
            symbol=resolved_symbol,
            open=str(latest["open"]),
            high=str(latest["high"]),
            low=str(latest["low"]),
            price=str(latest["close"]),
            volume=str(volume) if volume is not None else None,
            latest_day=str(latest["datetime"]),
            previous_close=str(previous["close"]),
            change=change,
            percent=percent,
            interval=_text(meta.get("interval")) or interval,
            currency=_text(meta.get("currency")) or DEFAULT_CURRENCY,
            exchange=_text(meta.get("exchange")) or DEFAULT_EXCHANGE,
            timezone=(
                _text(meta.get("exchange_timezone"))
                or _text(meta.get("timezone"))
                or DEFAULT_TIMEZONE
            ),
        )

    @staticmethod
    def _bar(values: Sequence[Any], index: int) -> Mapping[str, Any]:
        """Return bar ``index`` after checking it is an object with text fields."""
        bar = values[index]
        if not isinstance(bar, Mapping):
            raise MarketDataValidationError(
                "bad_shape", details={"expected": "values:list[object]", "index": index}
            )
        missing = [name for name in _BAR_TEXT_FIELDS if bar.get(name) is None]
        if missing:
            raise MarketDataValidationError(
                "missing_fields", details={"missing": missing, "index": index}
            )
        return bar


def _text(value: Any) -> str | None:
    """Return ``value`` as a stripped string, or ``None`` when blank/absent."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
