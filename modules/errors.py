"""
Capitol Trades Query Service - Exceptions

Exception Hierarchy:
    CapitolTradesError (base)
    ├── ValidationError - Caller arguments malformed or out of range
    ├── NotFoundError - Name search or URL yielded no identifier
    ├── FetchError - Network failure, timeout or non-2xx page response
    ├── RowParseError - One table row could not be parsed (recovered locally)
    └── QueryError - A public operation failed; wraps the underlying cause
"""
from __future__ import annotations

from typing import Any, Optional


class CapitolTradesError(Exception):
    """Base exception for all query service errors."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ValidationError(CapitolTradesError):
    """Raised before any network access when an argument is invalid."""
    pass


class NotFoundError(CapitolTradesError):
    """Raised when a search yields no matching link or identifier."""

    def __init__(self, message: str, query: Optional[str] = None,
                 context: Optional[dict[str, Any]] = None) -> None:
        self.query = query
        super().__init__(message, context)


class FetchError(CapitolTradesError):
    """Raised when a page request fails."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None) -> None:
        self.url = url
        self.status_code = status_code
        context = {}
        if status_code is not None:
            context["status"] = status_code
        super().__init__(message, context)


class RowParseError(CapitolTradesError):
    """Raised while extracting fields from a single row."""

    def __init__(self, message: str, row_number: Optional[int] = None) -> None:
        self.row_number = row_number
        super().__init__(message, {"row": row_number} if row_number is not None else None)


class QueryError(CapitolTradesError):
    """Raised by a public operation; the message names the operation and cause."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")
