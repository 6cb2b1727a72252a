# tests/unit/dependencies/test_providers.py
from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from pydantic import SecretStr

import stocksearch_api.dependencies.providers as deps
from stocksearch_api.application.use_cases.quotes.get_global_quote import GetGlobalQuote
from stocksearch_api.application.use_cases.quotes.get_time_series_quote import (
    GetTimeSeriesQuote,
)
from stocksearch_api.application.use_cases.workflows.render_chart import RenderChart
from stocksearch_api.application.use_cases.workflows.request_stock_analysis import (
    RequestStockAnalysis,
)


def _request(http_client: httpx.AsyncClient | None = None) -> SimpleNamespace:
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(http_client=http_client)))


def _fake_settings() -> SimpleNamespace:
    return SimpleNamespace(
        alphavantage_base_url="https://av.test",
        alphavantage_api_key=SecretStr("av"),
        twelvedata_base_url="https://td.test",
        twelvedata_api_key=SecretStr("td"),
        provider_timeout_s=3.0,
        provider_max_retries=1,
        workflow_base_url="http://wf.test",
        workflow_analysis_path="/a",
        workflow_chart_path="/c",
        workflow_timeout_s=9.0,
    )


def test_provider_settings_are_derived_from_app_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "get_settings", _fake_settings)

    av = deps._load_alphavantage_settings()
    assert av.base_url == "https://av.test"
    assert av.api_key is not None and av.api_key.get_secret_value() == "av"
    assert av.timeout_s == 3.0
    assert av.max_retries == 1

    td = deps._load_twelvedata_settings()
    assert td.base_url == "https://td.test"
    assert td.outputsize == 2

    wf = deps._load_workflow_settings()
    assert (wf.base_url, wf.analysis_path, wf.chart_path, wf.timeout_s) == (
        "http://wf.test",
        "/a",
        "/c",
        9.0,
    )


@pytest.mark.asyncio
async def test_use_case_providers_reuse_shared_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "get_settings", _fake_settings)
    async with httpx.AsyncClient() as shared:
        request = _request(shared)
        for provider, expected in (
            (deps.get_global_quote_use_case, GetGlobalQuote),
            (deps.get_time_series_quote_use_case, GetTimeSeriesQuote),
            (deps.get_stock_analysis_use_case, RequestStockAnalysis),
            (deps.get_render_chart_use_case, RenderChart),
        ):
            gen = provider(request)  # type: ignore[arg-type]
            uc = await gen.__anext__()
            assert isinstance(uc, expected)
            with pytest.raises(StopAsyncIteration):
                await gen.__anext__()
            assert not shared.is_closed


@pytest.mark.asyncio
async def test_use_case_provider_without_shared_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "get_settings", _fake_settings)
    gen = deps.get_global_quote_use_case(_request(None))  # type: ignore[arg-type]
    uc = await gen.__anext__()
    assert isinstance(uc, GetGlobalQuote)
    await gen.aclose()
