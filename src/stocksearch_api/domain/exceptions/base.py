# Copyright (c) StockSearch.
# SPDX-License-Identifier: MIT
"""
Base Domain Exceptions.

Summary:
    Root of every error the quote and workflow paths raise on purpose. Each
    subclass carries a stable ``code`` that the presenters map to an HTTP
    status, a human message (the vendor note or upstream text when one
    exists) and structured ``details`` that are safe to return to clients.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for quote/workflow domain errors.

    Args:
        message: Human-readable message. Empty means "use the code".
        details: Client-safe structured context (provider, status, field...).
            The mapping is copied.
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details) if details else {}

    @property
    def message(self) -> str:
        """Return the message shown to clients, falling back to :attr:`code`."""
        return str(self) or self.code

    def log_fields(self) -> dict[str, Any]:
        """Return structured logging fields for this error."""
        return {
            "error_code": self.code,
            "reason": type(self).__name__,
            "details": self.details,
        }
