# src/stocksearch_api/dependencies/core/bootstrap.py
# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Core bootstrap for shared infrastructure (settings, logging, HTTP).

The single public surface is :func:`bootstrap`, an async context manager that
yields a simple state object with the resolved Settings and shared HTTP client.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from fastapi import FastAPI

from stocksearch_api.config.settings import Settings, get_settings
from stocksearch_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

logger = get_json_logger(__name__)


@dataclass
class BootstrapState:
    """State yielded by the bootstrap context manager."""

    settings: Settings
    http_client: httpx.AsyncClient


@asynccontextmanager
async def bootstrap(app: FastAPI) -> AsyncGenerator[BootstrapState, None]:
    """Initialize and teardown shared infrastructure.

    Responsibilities:
        * Load application settings and apply the configured log level.
        * Create one shared HTTPX AsyncClient for all upstream calls.
        * Close it on exit, even on error.

    Args:
        app: FastAPI application instance.

    Yields:
        BootstrapState: Resolved settings and shared HTTP client.
    """
    settings: Settings = get_settings()
    if settings.log_level:
        configure_root_logging(settings.log_level.upper())
    logger.info("bootstrap.start", extra={"service": settings.service_name})

    http_client = httpx.AsyncClient(timeout=settings.provider_timeout_s)
    state = BootstrapState(settings=settings, http_client=http_client)

    try:
        yield state
    finally:
        try:
            await http_client.aclose()
        except httpx.HTTPError:
            logger.exception("bootstrap.http_client_close_failed")
        logger.info("bootstrap.stop")
