"""Shared fixtures for search client tests."""

from __future__ import annotations

import json
import os
from typing import Any, Callable

import httpx
import pytest

from wikisearch.client import get_searcher
from wikisearch.config import SearchSettings, get_settings

SAMPLE_HIT = {
    "ns": 0,
    "pageid": 1,
    "title": "T",
    "snippet": "S",
    "size": 10,
    "wordcount": 2,
    "timestamp": "2020-01-01T00:00:00Z",
}


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("WIKISEARCH_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    get_searcher.cache_clear()
    yield
    get_settings.cache_clear()
    get_searcher.cache_clear()


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings()


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    def _factory(
        body: Any = None, *, status_code: int = 200, text: str | None = None
    ) -> RecordingTransport:
        if text is None:
            text = json.dumps(body if body is not None else {"query": {"search": [SAMPLE_HIT]}})

        def responder(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code,
                text=text,
                headers={"Content-Type": "application/json; charset=utf-8"},
            )

        return RecordingTransport(responder)

    return _factory
