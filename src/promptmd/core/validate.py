"""Placeholder analysis and round-trip diagnostics

Advisory only: nothing here alters its input or raises on malformed content.
"""

import re
from collections import Counter
from typing import Any, Protocol

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from promptmd.core.inline import ID_PATTERNS, IdGrammar, placeholder_pattern
from promptmd.core.models import Document
from promptmd.core.parse import parse_markdown
from promptmd.core.serialize import serialize_document
from promptmd.core.utils.diff import diff_summary, unified_diff
from promptmd.registry import FunctionRegistry


# Loose shape: anything placeholder-like, whatever its id looks like
PLACEHOLDER_SHAPE_RE = re.compile(r"<%\s*function\s+(\S+?)\s*%>")


class EditorHandle(Protocol):
    def get_json(self) -> dict[str, Any]: ...


class PlaceholderCheck(BaseModel):
    function_id: str
    conforms: bool


class SerializationReport(BaseModel):
    markdown: str
    function_count: int
    has_valid_syntax: bool
    placeholders: list[PlaceholderCheck] = Field(default_factory=list)
    error: str | None = None     # set when the input could not be read as a tree


class FunctionIdReport(BaseModel):
    is_valid: bool
    valid_ids: list[str] = Field(default_factory=list)
    invalid_ids: list[str] = Field(default_factory=list)
    total_found: int = 0


class FunctionStats(BaseModel):
    total_placeholders: int
    unique_functions: int
    function_counts: dict[str, int] = Field(default_factory=dict)
    validation: FunctionIdReport


class RoundtripReport(BaseModel):
    rendered: str
    diff: list[str] = Field(default_factory=list)
    added: int = 0
    deleted: int = 0

    @property
    def lossless(self) -> bool:
        return not self.diff


def _conforms(function_id: str, grammar: IdGrammar) -> bool:
    return re.fullmatch(ID_PATTERNS[grammar], function_id) is not None


def validate_serialization(
    source: Document | EditorHandle,
    grammar: IdGrammar = "permissive",
    ) -> SerializationReport:
    """Serialize a tree (or an editor handle's JSON) and check every placeholder's id shape.

    Editor JSON that does not form a valid tree yields an empty report with
    ``error`` set, never an exception.
    """
    if isinstance(source, Document):
        doc = source
    else:
        try:
            doc = Document.model_validate(source.get_json())
        except ValidationError as e:
            logger.warning(f"Editor JSON is not a valid document tree: {e.error_count()} error(s)")
            return SerializationReport(markdown="", function_count=0, has_valid_syntax=False, error=str(e))
    markdown = serialize_document(doc)
    checks = [
        PlaceholderCheck(function_id=fid, conforms=_conforms(fid, grammar))
        for fid in PLACEHOLDER_SHAPE_RE.findall(markdown)
    ]
    return SerializationReport(
        markdown=markdown,
        function_count=len(checks),
        has_valid_syntax=all(c.conforms for c in checks),
        placeholders=checks,
    )


def extract_function_ids(markdown: str, grammar: IdGrammar = "permissive") -> list[str]:
    """Return placeholder ids in order of appearance, duplicates kept."""
    return placeholder_pattern(grammar).findall(markdown)


def validate_function_ids(
    markdown: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> FunctionIdReport:
    found = extract_function_ids(markdown, grammar)
    valid = [fid for fid in found if registry.is_valid(fid)]
    invalid = [fid for fid in found if not registry.is_valid(fid)]
    return FunctionIdReport(
        is_valid=not invalid,
        valid_ids=valid,
        invalid_ids=invalid,
        total_found=len(found),
    )


def function_stats(
    markdown: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> FunctionStats:
    """Count placeholder usage per id and validate ids against the registry."""
    counts = Counter(extract_function_ids(markdown, grammar))
    return FunctionStats(
        total_placeholders=sum(counts.values()),
        unique_functions=len(counts),
        function_counts=dict(counts),
        validation=validate_function_ids(markdown, registry, grammar),
    )


def check_roundtrip(
    markdown: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> RoundtripReport:
    """Parse then re-serialize markdown and diff the result against the input."""
    rendered = serialize_document(parse_markdown(markdown, registry, grammar))
    source = markdown.strip()
    counts = diff_summary(source, rendered)
    return RoundtripReport(
        rendered=rendered,
        diff=unified_diff(source + "\n", rendered + "\n", "input", "roundtrip"),
        added=counts["added"],
        deleted=counts["deleted"],
    )


def roundtrip_diff(
    markdown: str,
    registry: FunctionRegistry,
    grammar: IdGrammar = "permissive",
    ) -> list[str]:
    """Unified diff between markdown and its parse -> serialize image; empty if lossless."""
    return check_roundtrip(markdown, registry, grammar).diff
