"""Document tree models: blocks, inline nodes, marks, and function specs

Node type tags and the ``attrs`` layout follow the editor's JSON vocabulary, so a
tree dumped with ``model_dump(by_alias=True)`` loads straight into the editor.
"""

from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    Tag,
    field_validator,
    model_serializer,
    model_validator,
)


class FunctionSpec(BaseModel):
    """A callable function that placeholders may reference."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    internal_id: str = Field(
        serialization_alias="internalId",
        validation_alias=AliasChoices("internalId", "internal_id", "function_internal_id"),
    )
    description: str = ""

    @property
    def name(self) -> str:
        """Short name: the description up to the first ' - ' separator."""
        return self.description.split(" - ")[0] or self.description

    @property
    def display_name(self) -> str:
        name = self.name
        return name[:1].upper() + name[1:]


# === EDITOR JSON ===


class EditorNode(BaseModel):
    """Base for nodes whose editor JSON nests some fields under ``attrs``.

    Validation lifts ``attrs`` into plain fields. Dumping with
    ``by_alias=True`` nests them back, so the editor can load the result.
    """
    attr_keys: ClassVar[tuple[str, ...]] = ()   # dumped (aliased) field names
    text_in_content: ClassVar[bool] = False     # text lives in content[].text

    @model_validator(mode="before")
    @classmethod
    def _lift_attrs(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        attrs = data.pop("attrs", None)
        if isinstance(attrs, dict):
            data = {**attrs, **data}
        if cls.text_in_content and "text" not in data:
            content = data.pop("content", None) or []
            data["text"] = "".join(c.get("text") or "" for c in content if isinstance(c, dict))
        return data

    @model_serializer(mode="wrap")
    def _nest_attrs(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        data = handler(self)
        if not info.by_alias:
            return data
        attrs = {k: data.pop(k) for k in self.attr_keys if k in data}
        if attrs:
            data["attrs"] = attrs
        if self.text_in_content:
            text = data.pop("text", "")
            data["content"] = [{"type": "text", "text": text}] if text else []
        return data


# === MARKS ===


class MarkType(str, Enum):
    code = "code"
    strike = "strike"
    underline = "underline"
    italic = "italic"
    bold = "bold"
    link = "link"


# Wrapping order when re-emitting syntax: first entry is innermost.
MARK_ORDER: tuple[MarkType, ...] = (
    MarkType.code,
    MarkType.strike,
    MarkType.underline,
    MarkType.italic,
    MarkType.bold,
    MarkType.link,
)


class Mark(EditorNode):
    model_config = ConfigDict(frozen=True)
    attr_keys = ("href",)

    type: MarkType
    href: str | None = None     # link marks only


BOLD = Mark(type=MarkType.bold)


# === INLINE NODES ===


class TextNode(BaseModel):
    type: Literal["text"] = "text"
    text: str
    marks: list[Mark] = Field(default_factory=list)

    @field_validator("marks", mode="before")
    @classmethod
    def _drop_unknown_marks(cls, marks: Any) -> Any:
        """Skip editor marks with no markdown form (e.g. highlight)."""
        if not isinstance(marks, list):
            return marks
        known = {t.value for t in MarkType}
        return [m for m in marks if not isinstance(m, dict) or m.get("type") in known]

    @field_validator("marks")
    @classmethod
    def _normalize_marks(cls, marks: list[Mark]) -> list[Mark]:
        """Treat marks as a set: one per kind, stored in MARK_ORDER."""
        by_type: dict[MarkType, Mark] = {}
        for mark in marks:
            by_type.setdefault(mark.type, mark)
        return [by_type[t] for t in MARK_ORDER if t in by_type]

    def has_mark(self, mark_type: MarkType) -> bool:
        return any(m.type == mark_type for m in self.marks)


class FunctionBadge(EditorNode):
    model_config = ConfigDict(populate_by_name=True)
    attr_keys = ("functionId",)

    type: Literal["functionBadge"] = "functionBadge"
    function_id: str = Field(alias="functionId")


class HardBreak(BaseModel):
    type: Literal["hardBreak"] = "hardBreak"


class UnknownNode(BaseModel):
    """A node whose type tag the core does not recognize; kept opaque."""
    model_config = ConfigDict(extra="allow")

    type: str
    content: list["Node"] = Field(default_factory=list)
    text: str | None = None


# === BLOCK NODES ===


class Heading(EditorNode):
    attr_keys = ("level",)

    type: Literal["heading"] = "heading"
    level: Literal[1, 2, 3]
    content: list["Inline"] = Field(default_factory=list)


class Paragraph(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    content: list["Inline"] = Field(default_factory=list)


class ListItem(BaseModel):
    type: Literal["listItem"] = "listItem"
    content: list["Block"] = Field(default_factory=list)


class BulletList(BaseModel):
    type: Literal["bulletList"] = "bulletList"
    content: list[ListItem] = Field(default_factory=list)


class OrderedList(BaseModel):
    type: Literal["orderedList"] = "orderedList"
    content: list[ListItem] = Field(default_factory=list)


class Blockquote(BaseModel):
    type: Literal["blockquote"] = "blockquote"
    content: list["Block"] = Field(default_factory=list)


class CodeBlock(EditorNode):
    attr_keys = ("language",)
    text_in_content = True

    type: Literal["codeBlock"] = "codeBlock"
    language: str | None = None
    text: str = ""


class HorizontalRule(BaseModel):
    type: Literal["horizontalRule"] = "horizontalRule"


INLINE_TYPES = {"text", "functionBadge", "hardBreak"}
BLOCK_TYPES = {
    "heading", "paragraph", "listItem", "bulletList", "orderedList",
    "blockquote", "codeBlock", "horizontalRule",
}


def _node_tag(value: Any) -> str:
    """Discriminator: the node's type tag, or 'unknown' for tags outside the union."""
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if tag in INLINE_TYPES or tag in BLOCK_TYPES:
        return tag
    return "unknown"


Inline = Annotated[
    Union[
        Annotated[TextNode, Tag("text")],
        Annotated[FunctionBadge, Tag("functionBadge")],
        Annotated[HardBreak, Tag("hardBreak")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]

Block = Annotated[
    Union[
        Annotated[Heading, Tag("heading")],
        Annotated[Paragraph, Tag("paragraph")],
        Annotated[ListItem, Tag("listItem")],
        Annotated[BulletList, Tag("bulletList")],
        Annotated[OrderedList, Tag("orderedList")],
        Annotated[Blockquote, Tag("blockquote")],
        Annotated[CodeBlock, Tag("codeBlock")],
        Annotated[HorizontalRule, Tag("horizontalRule")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]

Node = Annotated[
    Union[
        Annotated[TextNode, Tag("text")],
        Annotated[FunctionBadge, Tag("functionBadge")],
        Annotated[HardBreak, Tag("hardBreak")],
        Annotated[Heading, Tag("heading")],
        Annotated[Paragraph, Tag("paragraph")],
        Annotated[ListItem, Tag("listItem")],
        Annotated[BulletList, Tag("bulletList")],
        Annotated[OrderedList, Tag("orderedList")],
        Annotated[Blockquote, Tag("blockquote")],
        Annotated[CodeBlock, Tag("codeBlock")],
        Annotated[HorizontalRule, Tag("horizontalRule")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]


# === DOCUMENT ===


class Document(BaseModel):
    """Root of a parsed prompt script; blocks are in reading order."""
    type: Literal["doc"] = "doc"
    content: list[Block] = Field(default_factory=list)


# Resolve forward references
UnknownNode.model_rebuild()
Heading.model_rebuild()
Paragraph.model_rebuild()
ListItem.model_rebuild()
BulletList.model_rebuild()
OrderedList.model_rebuild()
Blockquote.model_rebuild()
Document.model_rebuild()
