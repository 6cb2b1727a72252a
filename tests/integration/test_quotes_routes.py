# tests/integration/test_quotes_routes.py
from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stocksearch_api.application.use_cases.quotes.get_global_quote import GetGlobalQuote
from stocksearch_api.application.use_cases.quotes.get_time_series_quote import (
    GetTimeSeriesQuote,
)
from stocksearch_api.config.settings import get_settings
from stocksearch_api.dependencies.providers import (
    get_global_quote_use_case,
    get_time_series_quote_use_case,
)
from stocksearch_api.domain.exceptions.market_data import (
    MarketDataRateLimited,
    MarketDataUnavailable,
    ProviderNotConfigured,
)

_GLOBAL = {
    "Global Quote": {
        "01. symbol": "IBM",
        "02. open": "170.0000",
        "03. high": "172.5000",
        "04. low": "169.1000",
        "05. price": "171.2000",
        "06. volume": "3456789",
        "07. latest trading day": "2024-05-10",
        "08. previous close": "170.2000",
        "09. change": "1.0000",
        "10. change percent": "0.5875%",
    }
}

_SERIES = {
    "meta": {
        "symbol": "AAPL",
        "interval": "1day",
        "currency": "USD",
        "exchange_timezone": "America/New_York",
        "exchange": "NASDAQ",
    },
    "values": [
        {
            "datetime": "2024-05-10",
            "open": "146.00",
            "high": "151.00",
            "low": "145.50",
            "close": "150.00",
            "volume": "1000",
        },
        {
            "datetime": "2024-05-09",
            "open": "144.00",
            "high": "146.00",
            "low": "143.00",
            "close": "145.00",
            "volume": "900",
        },
    ],
    "status": "ok",
}


class _Source:
    """Fake provider returning a canned body or raising a canned error."""

    def __init__(self, body: Any = None, error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    async def global_quote(self, symbol: str) -> Any:
        self.calls.append((symbol,))
        if self.error is not None:
            raise self.error
        return self.body

    async def time_series(self, symbol: str, interval: str, *, outputsize: int | None = None) -> Any:
        self.calls.append((symbol, interval, outputsize))
        if self.error is not None:
            raise self.error
        return self.body


def _override_global(app: FastAPI, source: _Source) -> None:
    app.dependency_overrides[get_global_quote_use_case] = lambda: GetGlobalQuote(source)


def _override_series(app: FastAPI, source: _Source) -> None:
    app.dependency_overrides[get_time_series_quote_use_case] = lambda: GetTimeSeriesQuote(source)


# --------------------------------------------------------------------------- #
# /api/price/{symbol}
# --------------------------------------------------------------------------- #


def test_price_returns_flat_camel_case_quote(app: FastAPI, client: TestClient) -> None:
    _override_global(app, _Source(_GLOBAL))

    resp = client.get("/api/price/IBM", headers={"X-Request-ID": "rid-1"})

    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    assert resp.headers["X-Request-ID"] == "rid-1"
    assert resp.json() == {
        "symbol": "IBM",
        "open": "170.0000",
        "high": "172.5000",
        "low": "169.1000",
        "price": "171.2000",
        "volume": "3456789",
        "latestDay": "2024-05-10",
        "previousClose": "170.2000",
        "change": "1.0000",
        "percent": "0.5875%",
    }


def test_price_passes_symbol_through_unchanged(app: FastAPI, client: TestClient) -> None:
    source = _Source(_GLOBAL)
    _override_global(app, source)
    client.get("/api/price/brk.b")
    assert source.calls == [("brk.b",)]


def test_price_empty_wrapper_is_404(app: FastAPI, client: TestClient) -> None:
    _override_global(app, _Source({"Global Quote": {}}))

    resp = client.get("/api/price/ZZZZ")

    assert resp.status_code == 404
    err = resp.json()["error"]
    assert err["code"] == "SYMBOL_NOT_FOUND"
    assert err["http_status"] == 404
    assert err["message"] == "No data found for symbol"
    assert err["trace_id"] == resp.headers["X-Request-ID"]


def test_price_advisory_note_becomes_message(app: FastAPI, client: TestClient) -> None:
    note = "Our standard API rate limit is 25 requests per day."
    _override_global(app, _Source({"Information": note}))

    resp = client.get("/api/price/IBM")

    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == note


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (MarketDataRateLimited("alphavantage rate limit exceeded"), 429, "MARKET_DATA_RATE_LIMITED"),
        (MarketDataUnavailable("alphavantage is unavailable"), 503, "MARKET_DATA_UNAVAILABLE"),
        (ProviderNotConfigured("alphavantage API key is not configured"), 503, "PROVIDER_NOT_CONFIGURED"),
    ],
)
def test_price_maps_provider_failures(
    app: FastAPI, client: TestClient, error: Exception, status: int, code: str
) -> None:
    _override_global(app, _Source(error=error))

    resp = client.get("/api/price/IBM")

    assert resp.status_code == status
    assert resp.json()["error"]["code"] == code


def test_price_without_key_does_not_call_upstream(client: TestClient) -> None:
    with respx.mock(assert_all_called=False) as mock:
        route = mock.get(url__startswith="https://www.alphavantage.co").mock(
            return_value=httpx.Response(200, json=_GLOBAL)
        )
        resp = client.get("/api/price/IBM")

    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "PROVIDER_NOT_CONFIGURED"
    assert not route.called


def test_price_end_to_end_through_real_client(
    monkeypatch: pytest.MonkeyPatch, app: FastAPI
) -> None:
    monkeypatch.setenv("AV_API_KEY", "demo-key")
    get_settings.cache_clear()
    with respx.mock(assert_all_called=True) as mock:
        route = mock.get("https://www.alphavantage.co/query").mock(
            return_value=httpx.Response(200, json=_GLOBAL)
        )
        with TestClient(app, raise_server_exceptions=False) as client:
            resp = client.get("/api/price/IBM", headers={"X-Request-ID": "rid-e2e"})

    assert resp.status_code == 200
    assert resp.json()["price"] == "171.2000"
    upstream = route.calls.last.request
    assert upstream.url.params["function"] == "GLOBAL_QUOTE"
    assert upstream.url.params["apikey"] == "demo-key"
    assert upstream.headers["X-Request-ID"] == "rid-e2e"


# --------------------------------------------------------------------------- #
# /api/price-twelve
# --------------------------------------------------------------------------- #


def test_price_twelve_derives_change_and_meta(app: FastAPI, client: TestClient) -> None:
    source = _Source(_SERIES)
    _override_series(app, source)

    resp = client.get("/api/price-twelve", params={"symbol": "AAPL"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["change"] == "5.00"
    assert body["percent"] == "3.45%"
    assert body["price"] == "150.00"
    assert body["previousClose"] == "145.00"
    assert body["latestDay"] == "2024-05-10"
    assert body["interval"] == "1day"
    assert body["currency"] == "USD"
    assert body["exchange"] == "NASDAQ"
    assert body["timezone"] == "America/New_York"
    assert source.calls == [("AAPL", "1day", 2)]


def test_price_twelve_forwards_interval(app: FastAPI, client: TestClient) -> None:
    source = _Source(_SERIES)
    _override_series(app, source)
    client.get("/api/price-twelve", params={"symbol": "AAPL", "interval": "1h"})
    assert source.calls[0][1] == "1h"


def test_price_twelve_error_status_is_502(app: FastAPI, client: TestClient) -> None:
    _override_series(app, _Source({"status": "error", "code": 400, "message": "bad symbol"}))

    resp = client.get("/api/price-twelve", params={"symbol": "NOPE"})

    assert resp.status_code == 502
    err = resp.json()["error"]
    assert err["code"] == "PROVIDER_ERROR"
    assert err["message"] == "bad symbol"


def test_price_twelve_empty_values_is_404(app: FastAPI, client: TestClient) -> None:
    _override_series(app, _Source({"meta": {"symbol": "AAPL"}, "values": []}))
    resp = client.get("/api/price-twelve", params={"symbol": "AAPL"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "SYMBOL_NOT_FOUND"


def test_price_twelve_unparseable_close_is_502(app: FastAPI, client: TestClient) -> None:
    body = {
        "meta": {"symbol": "AAPL"},
        "values": [
            {"datetime": "2024-05-10", "open": "1", "high": "1", "low": "1", "close": "abc"}
        ],
    }
    _override_series(app, _Source(body))
    resp = client.get("/api/price-twelve", params={"symbol": "AAPL"})
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "UPSTREAM_PARSE_ERROR"


def test_price_twelve_requires_symbol(client: TestClient) -> None:
    resp = client.get("/api/price-twelve")
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
