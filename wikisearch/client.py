"""Wikipedia search client: encode, fetch, sanitize, parse and map."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

import httpx
from pydantic import ValidationError

from wikisearch.config import ProxyConfig, SearchSettings, get_settings
from wikisearch.exceptions import (
    InvalidArgument,
    MalformedResponse,
    TransportFailure,
    UnexpectedSchema,
)
from wikisearch.logging import logger
from wikisearch.models import SearchResponse, SearchResult, TransportMetadata
from wikisearch.sanitizer import sanitize

# Parameters sent with every request, in wire order.
BASE_PARAMS: tuple[tuple[str, str], ...] = (
    ("format", "json"),
    ("action", "query"),
    ("errorformat", "plaintext"),
    ("list", "search"),
)

# API field name -> SearchResult attribute.
RESULT_FIELDS: dict[str, str] = {
    "pageid": "page_id",
    "snippet": "preview",
    "size": "size",
    "title": "title",
    "wordcount": "word_count",
    "timestamp": "last_edited",
}


class WikiSearcher:
    """Searches Wikipedia and returns typed results.

    Each call performs exactly one GET request. The proxy in effect is read
    once when the call starts; changing :attr:`proxy` afterwards only affects
    later calls.

    When both a proxy and a custom ``transport`` are set, httpx routes
    requests through the proxy mount and the transport is bypassed.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        *,
        proxy: ProxyConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._proxy = proxy if proxy is not None else self._settings.proxy
        self._transport = transport

    @property
    def proxy(self) -> ProxyConfig | None:
        return self._proxy

    @proxy.setter
    def proxy(self, value: ProxyConfig | None) -> None:
        self._proxy = value

    @property
    def endpoint(self) -> str:
        return str(self._settings.api_endpoint)

    @staticmethod
    def build_params(query: str) -> list[tuple[str, str]]:
        normalized = (query or "").strip()
        if not normalized:
            raise InvalidArgument("A search query must be provided.")
        return [*BASE_PARAMS, ("srsearch", normalized)]

    async def search(self, query: str, proxy: ProxyConfig | None = None) -> SearchResponse:
        params = self.build_params(query)
        effective_proxy = proxy if proxy is not None else self._proxy

        logger.debug(
            "wiki_search_request",
            query=params[-1][1],
            proxied=effective_proxy is not None,
        )
        response = await self._fetch(params, effective_proxy)

        body = sanitize(response.text)
        results = parse_results(body)
        logger.debug(
            "wiki_search_completed",
            query=params[-1][1],
            status=response.status_code,
            hits=len(results),
        )
        return SearchResponse(
            raw_body=body,
            transport=TransportMetadata.from_response(response),
            results=results,
        )

    def _client_options(self, proxy: ProxyConfig | None) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headers": {"User-Agent": self._settings.user_agent},
        }
        timeout = self._settings.request_timeout_seconds
        if timeout is not None:
            options["timeout"] = httpx.Timeout(timeout)
        if proxy is not None:
            options["proxy"] = proxy.url
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def _fetch(
        self, params: list[tuple[str, str]], proxy: ProxyConfig | None
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(**self._client_options(proxy)) as client:
                response = await client.get(self.endpoint, params=params)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise TransportFailure(
                f"Search request failed ({status_code}): {exc.response.text[:500]}",
                status_code=status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportFailure(f"Search request failed: {exc}") from exc


def parse_results(body: str) -> tuple[SearchResult, ...]:
    """Parse a sanitized body and map ``query.search`` into results."""

    try:
        root = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponse(f"Search response is not valid JSON: {exc}") from exc

    query_node = root.get("query") if isinstance(root, dict) else None
    if not isinstance(query_node, dict):
        raise UnexpectedSchema("Search response has no 'query' object.", field="query")
    hits = query_node.get("search")
    if not isinstance(hits, list):
        raise UnexpectedSchema("Search response has no 'query.search' array.", field="search")

    return tuple(_map_result(index, item) for index, item in enumerate(hits))


def _map_result(index: int, item: Any) -> SearchResult:
    if not isinstance(item, dict):
        raise UnexpectedSchema(f"Search hit #{index} is not an object.")

    values: dict[str, Any] = {}
    for api_field, attribute in RESULT_FIELDS.items():
        if api_field not in item:
            raise UnexpectedSchema(
                f"Search hit #{index} is missing field '{api_field}'.", field=api_field
            )
        values[attribute] = item[api_field]

    try:
        return SearchResult(**values)
    except ValidationError as exc:
        attribute = str(exc.errors()[0]["loc"][0])
        api_field = next(
            (key for key, value in RESULT_FIELDS.items() if value == attribute), attribute
        )
        raise UnexpectedSchema(
            f"Search hit #{index} has an invalid '{api_field}' value.", field=api_field
        ) from exc


@lru_cache
def get_searcher() -> WikiSearcher:
    """Return the shared client instance used by :func:`search`."""

    return WikiSearcher()


async def search(query: str, proxy: ProxyConfig | None = None) -> SearchResponse:
    return await get_searcher().search(query, proxy=proxy)


__all__ = [
    "BASE_PARAMS",
    "RESULT_FIELDS",
    "WikiSearcher",
    "get_searcher",
    "parse_results",
    "search",
]
