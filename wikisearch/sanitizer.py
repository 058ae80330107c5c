"""Make raw search API payloads safe for strict JSON parsing."""

from __future__ import annotations

import html
import re
from html.entities import html5

QUOTE_ENTITY = "&quot;"
ESCAPED_QUOTE = '\\"'

_TAG_PATTERN = re.compile(r"<.*?>")
# Only complete references are decoded; "&copy" without ";" stays literal.
_ENTITY_PATTERN = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def _decode_entity(match: re.Match[str]) -> str:
    reference = match.group(0)
    if reference.startswith("&#"):
        return html.unescape(reference)
    return html5.get(reference[1:], reference)


def sanitize(raw: str) -> str:
    """Escape quote entities, decode the remaining entities and strip tags.

    The quote entity must be escaped before general decoding: once decoded it
    would be a bare ``"`` that terminates the enclosing JSON string.
    """

    unquoted = raw.replace(QUOTE_ENTITY, ESCAPED_QUOTE)
    decoded = _ENTITY_PATTERN.sub(_decode_entity, unquoted)
    return _TAG_PATTERN.sub("", decoded)


__all__ = ["sanitize"]
