"""Markdown to document tree: segmentation, classification, inline tokenization"""

from loguru import logger

from promptmd.core.classify import classify_block
from promptmd.core.inline import IdGrammar
from promptmd.core.models import Document
from promptmd.core.segment import split_blocks
from promptmd.registry import FunctionRegistry


def parse_markdown(
    markdown: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> Document:
    """Parse a prompt script into a Document, resolving placeholders against registry."""
    blocks = [classify_block(b, registry, grammar) for b in split_blocks(markdown)]
    logger.debug(f"Parsed {len(blocks)} block(s) with {len(registry)} known function(s)")
    return Document(content=blocks)
