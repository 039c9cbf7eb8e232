"""Recursive block parser producing the content tree.

Recognizers run in a fixed order because their syntaxes overlap:
header -> code -> list -> link -> plain text. A list item that contains a link
must be claimed by the list recognizer first, otherwise the link recognizer
would swallow the whole block.
"""

from __future__ import annotations

import re

from loguru import logger

from .. import config
from ..errors import StructuralParseError
from .elements import Break, Code, Document, Element, Header, Link, ListBlock, ListKind, Text
from .metadata import parse_metadata_lines, split_document
from .splitter import FENCE, split_blocks

UNORDERED_MARKERS = ("-", "+")
ORDERED_MARKERS = ("1.", "a)")
LIST_MARKERS = UNORDERED_MARKERS + ORDERED_MARKERS

LINK_PATTERN = r"\[(.*?)\]\((.*?)\)"


class DocumentParser:
    """Parses raw document text into a :class:`Document`.

    The link pattern is compiled once per parser instance. A parser holds no
    per-document state, so one instance can parse any number of documents.
    """

    def __init__(self, sentinel: str | None = None, list_indent: int | None = None) -> None:
        self.sentinel = sentinel or config.CONTENT_SENTINEL
        self.indent = " " * (list_indent or config.LIST_INDENT)
        self._link_pattern = re.compile(LINK_PATTERN)

    def parse(self, text: str) -> Document:
        header, body = split_document(text, self.sentinel)
        metadata = parse_metadata_lines(header)
        elements = self.parse_content(body)
        return Document(metadata=metadata, elements=tuple(elements))

    def parse_content(self, body: str) -> list[Element]:
        """Parse every block of ``body``, with a Break between consecutive blocks."""
        elements: list[Element] = []
        blocks = split_blocks(body)
        for idx, block in enumerate(blocks):
            if idx > 0:
                elements.append(Break())
            elements.extend(self.parse_block(block))
        logger.debug(f"Parsed {len(blocks)} blocks into {len(elements)} elements")
        return elements

    def parse_block(self, block: str) -> list[Element]:
        if block.startswith("#"):
            return [self._parse_header(block)]
        if _is_code(block):
            return [_parse_code(block)]
        if is_list(block):
            return [self._parse_list(block)]
        match = self._link_pattern.search(block)
        if match:
            return self._parse_link(block, match)
        return [Text(block.strip("\n"))]

    def _parse_header(self, block: str) -> Header:
        level = len(block) - len(block.lstrip("#"))
        if block[level : level + 1] != " ":
            raise StructuralParseError(f"Header marker must be followed by a space: {block.splitlines()[0]}")
        text = block[level + 1 :]
        return Header(level=level, children=tuple(self.parse_block(text)))

    def _parse_link(self, block: str, match: re.Match[str]) -> list[Element]:
        elements: list[Element] = []
        rest = block
        while match:
            start, end = match.span()
            if start > 0:
                elements.append(Text(rest[:start]))
            elements.append(Link(text=match.group(1), target=match.group(2)))
            rest = rest[end:]
            if not rest.strip():
                return elements
            # a tail claimed by an earlier recognizer goes back through parse_block
            if rest.startswith("#") or _is_code(rest) or is_list(rest):
                break
            match = self._link_pattern.search(rest)
        elements.extend(self.parse_block(rest))
        return elements

    def _parse_list(self, block: str) -> ListBlock:
        items: list[tuple[Element, ...]] = []
        nested: list[str] = []

        def flush_nested() -> None:
            if nested:
                items.append((self._parse_list("\n".join(nested)),))
                nested.clear()

        for line in block.split("\n"):
            if line.startswith(self.indent) and is_list(line):
                nested.append(line[len(self.indent) :])
                continue
            flush_nested()
            _, _, item = line.strip().partition(" ")
            items.append(tuple(self.parse_block(item.strip())))
        flush_nested()

        kind, marker = parse_list_kind(block.strip())
        return ListBlock(kind=kind, marker=marker, items=tuple(items))


def _is_code(block: str) -> bool:
    stripped = block.strip()
    return "\n" in stripped and stripped.startswith(FENCE) and stripped.endswith(FENCE)


def _parse_code(block: str) -> Code:
    lines = block.strip().split("\n")
    language = lines[0][len(FENCE) :].strip()
    body = "\n".join(lines[1:-1])
    # keep indentation of the first code line, drop blank edges
    body = body.strip("\n").rstrip()
    return Code(language=language, body=body)


def is_list(block: str) -> bool:
    """True when every line of ``block`` starts with a list marker and a space."""
    for line in block.split("\n"):
        marker, sep, _ = line.strip().partition(" ")
        if not sep or marker not in LIST_MARKERS:
            return False
    return True


def parse_list_kind(text: str) -> tuple[ListKind, str]:
    """Classify the list by its first marker; unordered markers are tested first."""
    for marker in UNORDERED_MARKERS:
        if text.startswith(marker):
            return ListKind.UNORDERED, marker
    for marker in ORDERED_MARKERS:
        if text.startswith(marker):
            return ListKind.ORDERED, marker
    raise StructuralParseError(f"Block does not start with a list marker: {text.splitlines()[0] if text else text}")


def parse_document(text: str) -> Document:
    return DocumentParser().parse(text)
