from wikisearch.client import WikiSearcher, get_searcher, search
from wikisearch.config import ProxyConfig, SearchSettings, get_settings
from wikisearch.exceptions import (
    InvalidArgument,
    MalformedResponse,
    SearchError,
    TransportFailure,
    UnexpectedSchema,
)
from wikisearch.logging import configure_logging
from wikisearch.models import SearchResponse, SearchResult, TransportMetadata
from wikisearch.sanitizer import sanitize

__all__ = [
    "WikiSearcher",
    "get_searcher",
    "search",
    "ProxyConfig",
    "SearchSettings",
    "get_settings",
    "SearchError",
    "InvalidArgument",
    "TransportFailure",
    "MalformedResponse",
    "UnexpectedSchema",
    "configure_logging",
    "SearchResponse",
    "SearchResult",
    "TransportMetadata",
    "sanitize",
]
