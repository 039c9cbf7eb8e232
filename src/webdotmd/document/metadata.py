"""Line scanner and metadata header parser.

A document starts with ``key: value`` lines, optionally grouped by blank lines,
terminated by a sentinel line (``:content:`` by default). Everything after the
sentinel line is the content body.
"""

from __future__ import annotations

from ..errors import MetadataError, MissingRequiredKeyError

DEFAULT_SENTINEL = ":content:"
REQUIRED_KEYS = ("template",)
KEY_VALUE_SEPARATOR = ": "


def split_document(text: str, sentinel: str = DEFAULT_SENTINEL) -> tuple[list[str], str]:
    """Split raw document text into header lines and the content body.

    The sentinel line itself belongs to neither part. Line endings are
    normalized to ``\\n``.
    """
    text = text.replace("\r\n", "\n")
    lines = text.split("\n")
    for idx, line in enumerate(lines):
        if line == sentinel:
            return lines[:idx], "\n".join(lines[idx + 1 :])
    raise MetadataError(f"Missing '{sentinel}' line separating metadata from content")


def parse_metadata_lines(lines: list[str]) -> dict[str, str]:
    info: dict[str, str] = {}
    for line in lines:
        # blank lines only group pairs visually
        if not line.strip():
            continue
        key, sep, value = line.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise MetadataError(f"Incorrect key: value pair in line: {line}")
        info[key] = value
    for key in REQUIRED_KEYS:
        if key not in info:
            raise MissingRequiredKeyError(key)
    return info


def parse_metadata(text: str, sentinel: str = DEFAULT_SENTINEL) -> dict[str, str]:
    """Parse the metadata header of a raw document into a key/value mapping."""
    header, _ = split_document(text, sentinel)
    return parse_metadata_lines(header)
