from __future__ import annotations

import json

import pytest

from wikisearch.sanitizer import sanitize


def test_quote_entity_becomes_escaped_quote_and_tags_are_stripped():
    cleaned = sanitize("a &quot;b&quot; <span>c</span>")

    assert cleaned == 'a \\"b\\" c'
    assert json.loads(f'"{cleaned}"') == 'a "b" c'


def test_quote_entity_inside_json_string_keeps_payload_parseable():
    raw = '{"snippet": "say &quot;hi&quot; to <span class=\\"searchmatch\\">Bob</span>"}'

    assert json.loads(sanitize(raw)) == {"snippet": 'say "hi" to Bob'}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("fish &amp; chips", "fish & chips"),
        ("caf&eacute;", "café"),
        ("&#8212; and &#x41;", "— and A"),
        ("&lt;b&gt;", ""),
    ],
)
def test_entities_are_decoded(raw, expected):
    assert sanitize(raw) == expected


def test_tags_are_removed_non_greedily():
    assert sanitize("<div>one</div> two <br/>three") == "one two three"


def test_unterminated_tag_is_left_alone():
    assert sanitize("1 < 2 and more") == "1 < 2 and more"


def test_plain_text_passes_through_unchanged():
    raw = '{"query": {"search": []}}'

    assert sanitize(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "plain words",
        '{"title": "Python", "size": 10}',
        "a &amp; b <i>c</i>",
    ],
)
def test_sanitize_is_idempotent_once_clean(raw):
    once = sanitize(raw)

    assert sanitize(once) == once


def test_entities_without_semicolon_stay_literal():
    raw = '{"t": "Pen&notes &copy 2020 &quot x"}'

    cleaned = sanitize(raw)

    assert cleaned == raw
    assert json.loads(cleaned) == {"t": "Pen&notes &copy 2020 &quot x"}


def test_unknown_named_entity_is_not_prefix_decoded():
    assert sanitize("Pen&notes; &copy;") == "Pen&notes; ©"


def test_tag_matching_does_not_cross_line_breaks():
    assert sanitize("a <span\nclass=x>b</span>") == "a <span\nclass=x>b"
