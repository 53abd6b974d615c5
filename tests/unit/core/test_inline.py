"""Unit tests for core/inline.py"""

import pytest

from promptmd.core.inline import format_placeholder, placeholder_pattern, tokenize_inline
from promptmd.core.models import BOLD, FunctionBadge, TextNode
from promptmd.registry import EMPTY_REGISTRY


EMAIL_ID = "xyz98765-wxyz-4321-lmno-pqrstuvwxyza"
LOOKUP_ID = "3f2b8c1e-9a4d-4e6f-8b2a-1c5d7e9f0a3b"


def test_known_placeholder_becomes_badge(registry):
    nodes = tokenize_inline(f"<% function {EMAIL_ID} %>", registry)
    assert nodes == [FunctionBadge(function_id=EMAIL_ID)]


@pytest.mark.parametrize("text", [
    f"<%function {EMAIL_ID}%>",
    f"<%   function   {EMAIL_ID}   %>",
    f"<%\tfunction\t{EMAIL_ID}\t%>",
])
def test_placeholder_whitespace_is_optional(registry, text):
    assert tokenize_inline(text, registry) == [FunctionBadge(function_id=EMAIL_ID)]


def test_unknown_placeholder_stays_literal(registry):
    """An id missing from the registry is kept verbatim as a single text node."""
    text = "<% function not-a-real-id %>"
    assert tokenize_inline(text, registry) == [TextNode(text=text)]


def test_empty_registry_resolves_nothing():
    text = f"<%function {EMAIL_ID} %>"
    assert tokenize_inline(text, EMPTY_REGISTRY) == [TextNode(text=text)]


def test_unclosed_placeholder_is_text(registry):
    text = f"call <% function {EMAIL_ID}"
    assert tokenize_inline(text, registry) == [TextNode(text=text)]


def test_text_around_badges(registry):
    nodes = tokenize_inline(f"Then <% function {EMAIL_ID} %> and <% function {LOOKUP_ID} %>.", registry)
    assert nodes == [
        TextNode(text="Then "),
        FunctionBadge(function_id=EMAIL_ID),
        TextNode(text=" and "),
        FunctionBadge(function_id=LOOKUP_ID),
        TextNode(text="."),
    ]


def test_bold_span(registry):
    assert tokenize_inline("**hi**", registry) == [TextNode(text="hi", marks=[BOLD])]


def test_multiple_bold_spans(registry):
    assert tokenize_inline("a **b** c **d**", registry) == [
        TextNode(text="a "),
        TextNode(text="b", marks=[BOLD]),
        TextNode(text=" c "),
        TextNode(text="d", marks=[BOLD]),
    ]


def test_unclosed_bold_is_literal(registry):
    assert tokenize_inline("**unclosed", registry) == [TextNode(text="**unclosed")]


def test_empty_bold_is_dropped(registry):
    assert tokenize_inline("a ****", registry) == [TextNode(text="a ")]


def test_bold_split_by_placeholder_stays_literal(registry):
    """Bold markers in different literal segments never pair across a badge."""
    nodes = tokenize_inline(f"**<% function {EMAIL_ID} %>**", registry)
    assert nodes == [TextNode(text="**"), FunctionBadge(function_id=EMAIL_ID), TextNode(text="**")]


def test_empty_span(registry):
    assert tokenize_inline("", registry) == []


def test_uuid_grammar_rejects_short_ids():
    pattern = placeholder_pattern("uuid")
    assert pattern.search("<% function abc %>") is None
    assert pattern.search(f"<% function {LOOKUP_ID} %>").group(1) == LOOKUP_ID


def test_uuid_grammar_requires_hex(registry):
    """The sample ids are 36 characters but not hex, so they stay literal under uuid."""
    text = f"<% function {EMAIL_ID} %>"
    assert tokenize_inline(text, registry, grammar="uuid") == [TextNode(text=text)]
    assert tokenize_inline(f"<% function {LOOKUP_ID} %>", registry, grammar="uuid") == [
        FunctionBadge(function_id=LOOKUP_ID)
    ]


def test_permissive_grammar_rejects_underscores(registry):
    assert placeholder_pattern().search("<% function bad_id %>") is None


def test_format_placeholder():
    assert format_placeholder("abc-1") == "<% function abc-1 %>"
