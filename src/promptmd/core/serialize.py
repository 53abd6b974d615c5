"""Document tree to markdown: one rule per node type, never raises"""

from collections.abc import Sequence
from typing import Any

from promptmd.core.inline import format_placeholder
from promptmd.core.models import (
    MARK_ORDER,
    Blockquote,
    BulletList,
    CodeBlock,
    Document,
    FunctionBadge,
    HardBreak,
    Heading,
    HorizontalRule,
    ListItem,
    Mark,
    MarkType,
    OrderedList,
    Paragraph,
    TextNode,
)


LIST_INDENT = "   "


def _wrap(text: str, mark: Mark) -> str:
    match mark.type:
        case MarkType.code:
            return f"`{text}`"
        case MarkType.strike:
            return f"~~{text}~~"
        case MarkType.underline:
            return f"<u>{text}</u>"
        case MarkType.italic:
            return f"*{text}*"
        case MarkType.bold:
            return f"**{text}**"
        case MarkType.link:
            return f"[{text}]({mark.href or ''})"
    return text


def serialize_text(node: TextNode) -> str:
    """Wrap text in its marks, innermost first, in MARK_ORDER."""
    text = node.text
    ordered = sorted(node.marks, key=lambda m: MARK_ORDER.index(m.type))
    for mark in ordered:
        text = _wrap(text, mark)
    return text


def serialize_inline(nodes: Sequence[Any]) -> str:
    return "".join(serialize_node(n) for n in nodes)


def _serialize_list(items: Sequence[Any], ordered: bool) -> str:
    out = []
    for index, item in enumerate(items):
        prefix = f"{index + 1}. " if ordered else "- "
        lines = serialize_node(item).split("\n")
        out.append("\n".join([prefix + lines[0], *(LIST_INDENT + line for line in lines[1:])]))
    return "\n".join(out)


def _children(node: Any) -> list:
    content = getattr(node, "content", None)
    if content is None and isinstance(node, dict):
        content = node.get("content")
    return content if isinstance(content, list) else []


def serialize_node(node: Any) -> str:
    """Serialize any block or inline node to markdown."""
    match node:
        case TextNode():
            return serialize_text(node)
        case FunctionBadge():
            return format_placeholder(node.function_id)
        case HardBreak():
            return "  \n"
        case Heading():
            return "#" * node.level + " " + serialize_inline(node.content)
        case Paragraph():
            return serialize_inline(node.content)
        case BulletList():
            return _serialize_list(node.content, ordered=False)
        case OrderedList():
            return _serialize_list(node.content, ordered=True)
        case ListItem():
            return "\n".join(serialize_node(n) for n in node.content)
        case Blockquote():
            quoted = "\n".join(serialize_node(n) for n in node.content)
            return "\n".join(f"> {line}" for line in quoted.split("\n"))
        case CodeBlock():
            return f"```{node.language or ''}\n{node.text}\n```"
        case HorizontalRule():
            return "---"
        case _:
            # Unknown node: best effort from its children, else its text
            children = _children(node)
            if children:
                return "".join(serialize_node(n) for n in children)
            text = getattr(node, "text", None)
            if text is None and isinstance(node, dict):
                text = node.get("text")
            return text if isinstance(text, str) else ""


def serialize_block(block: Any) -> str:
    return serialize_node(block)


def serialize_document(doc: Document) -> str:
    """Serialize a Document; blocks are separated by a blank line."""
    return "\n\n".join(serialize_block(b) for b in doc.content)
