# tests/unit/config/test_settings.py
from __future__ import annotations

import pytest

from stocksearch_api.config.settings import Environment, Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    s = Settings(_env_file=None)  # type: ignore[call-arg]
    assert s.environment is Environment.TEST
    assert s.port == 3001
    assert s.service_name == "stocksearch-api"
    assert s.alphavantage_api_key is None
    assert s.twelvedata_api_key is None
    assert s.alphavantage_base_url == "https://www.alphavantage.co"
    assert s.twelvedata_base_url == "https://api.twelvedata.com"
    assert s.provider_timeout_s == 8.0
    assert s.provider_max_retries == 2
    assert s.workflow_analysis_path == "/webhook-test/stock-analysis"
    assert s.workflow_chart_path == "/webhook-test/chart"
    assert s.cors_allow_origins == ["*"]


def test_env_aliases_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AV_API_KEY", "av-secret")
    monkeypatch.setenv("TWELVEDATA_API_KEY", "td-secret")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example ,")

    s = Settings(_env_file=None)  # type: ignore[call-arg]

    assert s.alphavantage_api_key is not None
    assert s.alphavantage_api_key.get_secret_value() == "av-secret"
    assert s.twelvedata_api_key is not None
    assert s.twelvedata_api_key.get_secret_value() == "td-secret"
    assert s.port == 8080
    assert s.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert "av-secret" not in repr(s)


def test_wildcard_cors_allowed_in_test(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    assert Settings(_env_file=None).cors_allow_origins == ["*"]  # type: ignore[call-arg]


def test_unset_cors_outside_dev_and_test_allows_no_origins(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert get_settings().cors_allow_origins == []


def test_wildcard_cors_rejected_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_out_of_range_values_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROVIDER_MAX_RETRIES", "99")
    with pytest.raises(RuntimeError):
        get_settings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
