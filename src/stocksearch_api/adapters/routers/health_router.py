# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

Purpose:
    Expose a plain-text banner at ``/`` and a liveness signal at
    ``/health/liveness``. There is no readiness probe: the service holds no
    connections besides the shared HTTP client.
"""

from __future__ import annotations

import typing as t

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from stocksearch_api.adapters.schemas.http.base import BaseHTTPSchema

router = APIRouter()
root_router = APIRouter()

BANNER: t.Final[str] = "Hello World"


class LivenessResponse(BaseHTTPSchema):
    """Liveness response indicating the process is running."""

    status: t.Literal["ok"] = "ok"


@router.get(
    "/liveness",
    response_model=LivenessResponse,
    operation_id="health_liveness",
    summary="Liveness probe",
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@root_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def banner() -> str:
    return BANNER
