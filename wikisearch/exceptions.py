"""Errors raised by the search pipeline."""

from __future__ import annotations


class SearchError(RuntimeError):
    """Base class for every failure surfaced by a search call."""


class InvalidArgument(SearchError, ValueError):
    """The caller supplied an unusable query."""


class TransportFailure(SearchError):
    """The HTTP exchange failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(SearchError):
    """The sanitized body is not valid JSON."""


class UnexpectedSchema(SearchError):
    """The JSON payload does not have the expected search result shape."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


__all__ = [
    "SearchError",
    "InvalidArgument",
    "TransportFailure",
    "MalformedResponse",
    "UnexpectedSchema",
]
