from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class Plain:
    kind: ClassVar[str] = "plain"
    text: str


@dataclass(frozen=True)
class Emphasized:
    kind: ClassVar[str] = "emphasized"
    text: str


InlineSpan = Union[Plain, Emphasized]


@dataclass(frozen=True)
class Heading:
    kind: ClassVar[str] = "heading"
    level: int  # 1..3, the block renderer only knows three levels
    text: str


@dataclass(frozen=True)
class ListItem:
    kind: ClassVar[str] = "list_item"
    ordered: bool
    text: str


@dataclass(frozen=True)
class CodeBlock:
    kind: ClassVar[str] = "code"
    language: str  # may be empty
    lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class Spacer:
    kind: ClassVar[str] = "spacer"


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    spans: tuple[InlineSpan, ...] = ()


Block = Union[Heading, ListItem, CodeBlock, Spacer, Paragraph]


@dataclass(frozen=True)
class TocEntry:
    id: str  # slug, anchor target
    text: str
    level: int  # 1..6


def to_dict(node: Any) -> dict[str, Any]:
    """Serialise a block, span or TOC entry into a JSON-ready dict."""
    out: dict[str, Any] = {}
    kind = getattr(node, "kind", None)
    if kind is not None:
        out["kind"] = kind
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name == "spans":
            value = [to_dict(span) for span in value]
        elif isinstance(value, tuple):
            value = list(value)
        out[f.name] = value
    return out
