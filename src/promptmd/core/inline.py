"""Inline tokenization: function placeholders, then bold marks"""

import re
from typing import Literal

from loguru import logger

from promptmd.core.models import BOLD, FunctionBadge, TextNode
from promptmd.registry import FunctionRegistry


IdGrammar = Literal["permissive", "uuid"]

ID_PATTERNS: dict[str, str] = {
    "permissive": r"[A-Za-z0-9-]+",
    "uuid":       r"[0-9a-fA-F-]{36}",
}

BOLD_RE = re.compile(r"\*\*(.*?)\*\*")


def placeholder_pattern(grammar: IdGrammar = "permissive") -> re.Pattern[str]:
    """Compile `<% function <id> %>` with the id capture restricted to grammar."""
    id_re = ID_PATTERNS[grammar]
    if grammar == "uuid":
        # exact width: no partial match inside a longer token
        id_re += r"(?![A-Za-z0-9-])"
    return re.compile(rf"<%\s*function\s+({id_re})\s*%>")


def format_placeholder(function_id: str) -> str:
    return f"<% function {function_id} %>"


def _tokenize_bold(text: str) -> list[TextNode]:
    """Split a literal segment into plain and bold text nodes."""
    nodes: list[TextNode] = []
    pos = 0
    for m in BOLD_RE.finditer(text):
        nodes.append(TextNode(text=text[pos:m.start()]))
        nodes.append(TextNode(text=m.group(1), marks=[BOLD]))
        pos = m.end()
    nodes.append(TextNode(text=text[pos:]))
    return nodes


def tokenize_inline(
    text: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> list[TextNode | FunctionBadge]:
    """Convert a text span into text and function-badge nodes, left to right.

    Placeholders whose id is missing from the registry stay as literal text,
    verbatim. Empty text nodes are dropped.
    """
    nodes: list[TextNode | FunctionBadge] = []
    pos = 0
    for m in placeholder_pattern(grammar).finditer(text):
        nodes.extend(_tokenize_bold(text[pos:m.start()]))
        function_id = m.group(1)
        if registry.is_valid(function_id):
            nodes.append(FunctionBadge(function_id=function_id))
        else:
            logger.debug(f"Unresolved function placeholder: {function_id!r}")
            nodes.append(TextNode(text=m.group(0)))
        pos = m.end()
    nodes.extend(_tokenize_bold(text[pos:]))
    return [n for n in nodes if not (isinstance(n, TextNode) and n.text == "")]
