"""Block classification: an ordered list of (predicate, constructor) rules

The first rule whose predicate accepts a block decides its type. A block no rule
accepts is a paragraph, so mixed list markers degrade rather than fail.
"""

import re
from collections.abc import Callable

from promptmd.core.inline import IdGrammar, tokenize_inline
from promptmd.core.models import Block, BulletList, Heading, ListItem, OrderedList, Paragraph
from promptmd.registry import FunctionRegistry


ORDERED_ITEM_RE = re.compile(r"^\d+\.\s+(.+)$")
BULLET_ITEM_RE = re.compile(r"^[-*]\s+(.+)$")

Constructor = Callable[[str, FunctionRegistry, IdGrammar], Block]


def _lines(block: str) -> list[str]:
    return [line.strip() for line in block.split("\n") if line.strip()]


def _heading(level: int) -> Constructor:
    marker = "#" * level + " "

    def build(block: str, registry: FunctionRegistry, grammar: IdGrammar) -> Heading:
        return Heading(level=level, content=tokenize_inline(block[len(marker):], registry, grammar))
    return build


def _all_lines_match(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    def check(block: str) -> bool:
        return all(pattern.match(line) for line in _lines(block))
    return check


def _list_items(pattern: re.Pattern[str], block: str, registry: FunctionRegistry, grammar: IdGrammar) -> list[ListItem]:
    return [
        ListItem(content=[Paragraph(content=tokenize_inline(pattern.match(line).group(1), registry, grammar))])
        for line in _lines(block)
    ]


def _ordered_list(block: str, registry: FunctionRegistry, grammar: IdGrammar) -> OrderedList:
    return OrderedList(content=_list_items(ORDERED_ITEM_RE, block, registry, grammar))


def _bullet_list(block: str, registry: FunctionRegistry, grammar: IdGrammar) -> BulletList:
    return BulletList(content=_list_items(BULLET_ITEM_RE, block, registry, grammar))


def _paragraph(block: str, registry: FunctionRegistry, grammar: IdGrammar) -> Paragraph:
    # soft-wrapped lines collapse into one
    return Paragraph(content=tokenize_inline(" ".join(_lines(block)), registry, grammar))


BLOCK_RULES: list[tuple[Callable[[str], bool], Constructor]] = [
    (lambda b: b.startswith("### "),      _heading(3)),
    (lambda b: b.startswith("## "),       _heading(2)),
    (lambda b: b.startswith("# "),        _heading(1)),
    (_all_lines_match(ORDERED_ITEM_RE),   _ordered_list),
    (_all_lines_match(BULLET_ITEM_RE),    _bullet_list),
]


def classify_block(
    block: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> Block:
    """Map one trimmed block candidate to a typed block node."""
    for accepts, build in BLOCK_RULES:
        if accepts(block):
            return build(block, registry, grammar)
    return _paragraph(block, registry, grammar)
