# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Normalized Quote Entity

Purpose:
    Immutable, provider-agnostic representation of a single stock quote as
    produced by the quote normalizer (no I/O).

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass

from .base import BaseEntity


@dataclass(frozen=True, slots=True)
class NormalizedQuote(BaseEntity):
    """Canonical quote record.

    Numeric fields keep the upstream string representation. ``change`` and
    ``percent`` are either passed through from the provider or derived with
    two fractional digits (derived ``percent`` carries a trailing ``%``).

    Args:
        symbol: Ticker symbol as reported by the provider.
        open: Opening price.
        high: Session high.
        low: Session low.
        price: Latest price (close of the latest bar for time-series sources).
        volume: Traded volume; ``None`` when the provider does not report it.
        latest_day: Latest trading day or bar timestamp.
        previous_close: Previous close.
        change: Absolute change versus previous close.
        percent: Percent change versus previous close, suffixed with ``%``.
        interval: Sampling interval (time-series sources only).
        currency: ISO currency code (time-series sources only).
        exchange: Listing exchange (time-series sources only).
        timezone: Exchange timezone (time-series sources only).

    Raises:
        ValueError: If ``symbol`` is empty.
    """

    symbol: str
    open: str
    high: str
    low: str
    price: str
    volume: str | None
    latest_day: str
    previous_close: str
    change: str
    percent: str
    interval: str | None = None
    currency: str | None = None
    exchange: str | None = None
    timezone: str | None = None

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("symbol must be non-empty")
