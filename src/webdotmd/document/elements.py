"""Content tree: typed elements produced by the block parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ListKind(str, Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"


@dataclass(frozen=True)
class Text:
    """Literal inline text."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class Break:
    """Separator between two parsed blocks."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "break"}


@dataclass(frozen=True)
class Header:
    level: int
    children: tuple[Element, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "header",
            "level": self.level,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass(frozen=True)
class Link:
    text: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "link", "text": self.text, "target": self.target}


@dataclass(frozen=True)
class ListBlock:
    """Ordered or unordered list; each item is its own element sequence."""

    kind: ListKind
    marker: str
    items: tuple[tuple[Element, ...], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "list",
            "kind": self.kind.value,
            "marker": self.marker,
            "items": [[c.to_dict() for c in item] for item in self.items],
        }


@dataclass(frozen=True)
class Code:
    language: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "code", "language": self.language, "body": self.body}


Element = Union[Text, Break, Header, Link, ListBlock, Code]


@dataclass(frozen=True)
class Document:
    """Parsed page: metadata header plus the root element sequence."""

    metadata: dict[str, str] = field(default_factory=dict)
    elements: tuple[Element, ...] = ()

    @property
    def template_name(self) -> str:
        return self.metadata["template"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "elements": [el.to_dict() for el in self.elements],
        }
