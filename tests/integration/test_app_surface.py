# tests/integration/test_app_surface.py
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stocksearch_api.config.settings import get_settings
from stocksearch_api.dependencies.providers import get_global_quote_use_case
from stocksearch_api.main import create_app


def test_root_banner(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Hello World"
    assert resp.headers["content-type"].startswith("text/plain")


def test_liveness(client: TestClient) -> None:
    resp = client.get("/health/liveness")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metrics_exposes_upstream_collectors(client: TestClient) -> None:
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "stocksearch_upstream_latency_seconds" in resp.text


def test_request_id_is_echoed_or_generated(client: TestClient) -> None:
    assert client.get("/", headers={"X-Request-ID": "abc-1"}).headers["X-Request-ID"] == "abc-1"
    assert client.get("/").headers["X-Request-ID"]


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    err = resp.json()["error"]
    assert err["code"] == "HTTP_ERROR"
    assert err["http_status"] == 404


def test_method_not_allowed_uses_error_envelope(client: TestClient) -> None:
    resp = client.get("/api/chart")
    assert resp.status_code == 405
    assert resp.json()["error"]["code"] == "HTTP_ERROR"


def test_unexpected_failure_is_internal_error(app: FastAPI, client: TestClient) -> None:
    class _Broken:
        async def execute(self, symbol: str) -> None:
            raise RuntimeError("kaboom")

    app.dependency_overrides[get_global_quote_use_case] = lambda: _Broken()

    resp = client.get("/api/price/IBM")

    assert resp.status_code == 500
    err = resp.json()["error"]
    assert err["code"] == "INTERNAL_ERROR"
    assert "kaboom" not in resp.text


def test_cors_preflight_allows_any_origin_by_default(client: TestClient) -> None:
    resp = client.options(
        "/api/price/IBM",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")


def test_openapi_lists_public_routes(client: TestClient) -> None:
    paths = client.get("/openapi.json").json()["paths"]
    for path in ("/api/price/{symbol}", "/api/price-twelve", "/api/stock-analysis", "/api/chart"):
        assert path in paths


def test_production_without_allowed_origins_grants_no_cors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()

    with TestClient(create_app(), raise_server_exceptions=False) as client:
        preflight = client.options(
            "/api/price/IBM",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "GET"},
        )
        simple = client.get("/", headers={"Origin": "https://evil.example"})

    assert "access-control-allow-origin" not in preflight.headers
    assert "access-control-allow-origin" not in simple.headers
