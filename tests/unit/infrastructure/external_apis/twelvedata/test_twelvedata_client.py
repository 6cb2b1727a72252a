# tests/unit/infrastructure/external_apis/twelvedata/test_twelvedata_client.py
from __future__ import annotations

import httpx
import prometheus_client as prom
import pytest
import respx

from stocksearch_api.domain.exceptions.market_data import (
    MarketDataUnavailable,
    ProviderError,
    ProviderNotConfigured,
)
from stocksearch_api.infrastructure.external_apis.base_client import parse_retry_after
from stocksearch_api.infrastructure.external_apis.twelvedata.client import TwelveDataClient
from stocksearch_api.infrastructure.external_apis.twelvedata.settings import TwelveDataSettings
from stocksearch_api.infrastructure.resilience.retry import RetryPolicy

_ONE_RETRY = RetryPolicy(total=1, base=0.0, cap=0.0, jitter=False)
_NO_RETRY = RetryPolicy(total=0, base=0.0, cap=0.0, jitter=False)

_BODY = {
    "meta": {"symbol": "AAPL", "interval": "1day", "currency": "USD"},
    "values": [
        {"datetime": "2024-05-10", "open": "1", "high": "2", "low": "0.5", "close": "1.5"},
        {"datetime": "2024-05-09", "open": "1", "high": "2", "low": "0.5", "close": "1.4"},
    ],
    "status": "ok",
}


def _settings(**overrides) -> TwelveDataSettings:
    values = {"api_key": "td-key", "base_url": "https://td.test"}
    values.update(overrides)
    return TwelveDataSettings(**values)  # type: ignore[arg-type]


@pytest.mark.asyncio
@respx.mock
async def test_time_series_builds_params() -> None:
    cfg = _settings()
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http, retry_policy=_NO_RETRY)
        route = respx.get(f"{cfg.base_url}/time_series").mock(
            return_value=httpx.Response(200, json=_BODY)
        )

        raw = await client.time_series("AAPL", "1day")

        assert raw == _BODY
        params = route.calls.last.request.url.params
        assert params["symbol"] == "AAPL"
        assert params["interval"] == "1day"
        assert params["outputsize"] == "2"
        assert params["apikey"] == "td-key"


@pytest.mark.asyncio
@respx.mock
async def test_time_series_outputsize_override() -> None:
    cfg = _settings()
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http, retry_policy=_NO_RETRY)
        route = respx.get(f"{cfg.base_url}/time_series").mock(
            return_value=httpx.Response(200, json=_BODY)
        )
        await client.time_series("AAPL", "1h", outputsize=5)
        assert route.calls.last.request.url.params["outputsize"] == "5"


@pytest.mark.asyncio
@respx.mock
async def test_error_status_body_with_200_passes_through() -> None:
    cfg = _settings()
    body = {"status": "error", "code": 400, "message": "bad symbol"}
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http, retry_policy=_NO_RETRY)
        respx.get(f"{cfg.base_url}/time_series").mock(return_value=httpx.Response(200, json=body))
        assert await client.time_series("NOPE", "1day") == body


@pytest.mark.asyncio
@respx.mock
async def test_4xx_uses_vendor_message() -> None:
    cfg = _settings()
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http, retry_policy=_NO_RETRY)
        respx.get(f"{cfg.base_url}/time_series").mock(
            return_value=httpx.Response(401, json={"status": "error", "message": "bad key"})
        )
        with pytest.raises(ProviderError, match="bad key"):
            await client.time_series("AAPL", "1day")

        respx.get(f"{cfg.base_url}/time_series").mock(return_value=httpx.Response(404))
        with pytest.raises(ProviderError, match="twelvedata rejected the request"):
            await client.time_series("AAPL", "1day")


@pytest.mark.asyncio
@respx.mock
async def test_retries_are_counted() -> None:
    cfg = _settings()
    labels = {"provider": "twelvedata", "endpoint": "time_series", "reason": "MarketDataUnavailable"}
    before = prom.REGISTRY.get_sample_value("stocksearch_upstream_retries_total", labels) or 0.0
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http, retry_policy=_ONE_RETRY)
        route = respx.get(f"{cfg.base_url}/time_series").mock(return_value=httpx.Response(502))
        with pytest.raises(MarketDataUnavailable):
            await client.time_series("AAPL", "1day")
        assert route.call_count == 2
    after = prom.REGISTRY.get_sample_value("stocksearch_upstream_retries_total", labels)
    assert after == before + 1


@pytest.mark.asyncio
@respx.mock
async def test_missing_api_key_refuses() -> None:
    cfg = _settings(api_key=None)
    async with httpx.AsyncClient() as http:
        client = TwelveDataClient(cfg, http=http)
        route = respx.get(f"{cfg.base_url}/time_series").mock(return_value=httpx.Response(200))
        with pytest.raises(ProviderNotConfigured):
            await client.time_series("AAPL", "1day")
        assert not route.called


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("", None), ("3", 3.0), ("1.5", 1.5), ("-2", 0.0), ("soon", None)],
)
def test_parse_retry_after(raw: str | None, expected: float | None) -> None:
    assert parse_retry_after(raw) == expected
