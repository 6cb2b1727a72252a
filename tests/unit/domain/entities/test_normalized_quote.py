from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from stocksearch_api.domain.entities.chart import ChartImage
from stocksearch_api.domain.entities.quote import NormalizedQuote


def _quote(**overrides: object) -> NormalizedQuote:
    fields: dict[str, object] = {
        "symbol": "IBM",
        "open": "1",
        "high": "2",
        "low": "0.5",
        "price": "1.5",
        "volume": "10",
        "latest_day": "2024-05-10",
        "previous_close": "1.4",
        "change": "0.10",
        "percent": "7.14%",
    }
    fields.update(overrides)
    return NormalizedQuote(**fields)  # type: ignore[arg-type]


def test_quote_is_immutable() -> None:
    q = _quote()
    with pytest.raises(FrozenInstanceError):
        q.price = "2"  # type: ignore[misc]


def test_quote_requires_symbol() -> None:
    with pytest.raises(ValueError):
        _quote(symbol="")


def test_meta_fields_default_to_none() -> None:
    q = _quote()
    assert (q.interval, q.currency, q.exchange, q.timezone) == (None, None, None, None)


def test_chart_image_defaults_to_png() -> None:
    assert ChartImage(content=b"\x89PNG").media_type == "image/png"
