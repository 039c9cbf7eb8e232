"""Document parsing: metadata header, block splitting, recursive block parser."""

from .elements import Break, Code, Document, Element, Header, Link, ListBlock, ListKind, Text
from .metadata import parse_metadata, split_document
from .splitter import split_blocks
from .parser import DocumentParser, is_list, parse_document, parse_list_kind

__all__ = [
    "Break",
    "Code",
    "Document",
    "Element",
    "Header",
    "Link",
    "ListBlock",
    "ListKind",
    "Text",
    "parse_metadata",
    "split_document",
    "split_blocks",
    "DocumentParser",
    "is_list",
    "parse_document",
    "parse_list_kind",
]
