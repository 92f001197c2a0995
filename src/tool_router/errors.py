"""Errors raised by tool adapters.

Parsing problems are never raised; only I/O failures surface here and they
abort the current turn.
"""

from __future__ import annotations


class ToolServiceError(RuntimeError):
    """Base class for failures of an external tool service."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(ToolServiceError):
    """Raised at call time when a service has no API key configured."""


class SearchServiceError(ToolServiceError):
    """Web search provider returned a non-2xx response."""


class RetrievalServiceError(ToolServiceError):
    """Retrieval provider returned a non-2xx response."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(
            f"RAG API error: {status_code} {reason}".rstrip(),
            status_code=status_code,
        )
        self.reason = reason
