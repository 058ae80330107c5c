"""Pydantic models returned by the search client."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator

import httpx
from pydantic import BaseModel, ConfigDict, computed_field

ARTICLE_URL_TEMPLATE = "https://en.wikipedia.org/?curid={page_id}"


class SearchResult(BaseModel):
    """A single hit from a Wikipedia search."""

    model_config = ConfigDict(frozen=True)

    title: str
    page_id: int
    preview: str
    # Reported by the API without documented units; kept as-is.
    size: int
    word_count: int
    last_edited: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return ARTICLE_URL_TEMPLATE.format(page_id=self.page_id)


class TransportMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    reason_phrase: str
    url: str
    http_version: str
    headers: tuple[tuple[str, str], ...]

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TransportMetadata":
        return cls(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            url=str(response.request.url),
            http_version=response.http_version,
            headers=tuple(response.headers.items()),
        )

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""

        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default


class SearchResponse(BaseModel):
    """Outcome of one search call: sanitized body, HTTP metadata and hits."""

    model_config = ConfigDict(frozen=True)

    raw_body: str
    transport: TransportMetadata
    results: tuple[SearchResult, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[SearchResult]:  # type: ignore[override]
        return iter(self.results)


__all__ = [
    "ARTICLE_URL_TEMPLATE",
    "SearchResult",
    "TransportMetadata",
    "SearchResponse",
]
