# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""Rendered chart image returned by the chart workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from stocksearch_api.domain.entities.base import BaseEntity

DEFAULT_CHART_MEDIA_TYPE: Final[str] = "image/png"


@dataclass(frozen=True, slots=True)
class ChartImage(BaseEntity):
    """Opaque chart bytes plus the media type reported upstream."""

    content: bytes
    media_type: str = DEFAULT_CHART_MEDIA_TYPE
