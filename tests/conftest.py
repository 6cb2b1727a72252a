# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Settings are read lazily; pin a test environment before anything imports the app.
os.environ.setdefault("ENVIRONMENT", "test")

from stocksearch_api.config.settings import get_settings  # noqa: E402
from stocksearch_api.main import create_app  # noqa: E402

_PROVIDER_ENV = (
    "AV_API_KEY",
    "TWELVEDATA_API_KEY",
    "ALLOWED_ORIGINS",
    "WORKFLOW_BASE_URL",
)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate each test from the host environment and the settings cache."""
    for key in _PROVIDER_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient that runs the lifespan and returns 500s instead of raising."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
