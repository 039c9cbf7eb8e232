"""Placeholder scanner and the Template structure.

Value placeholders look like ``{{ $name$ }}``, autofill placeholders like
``{{ %name% }}``. Positions are stored relative to the end of the previous
placeholder (or to the start of the template for the first one), so filling
can consume the content left to right without re-indexing after values of a
different length are spliced in. For example::

    "some text, {{ $name$ }}, other text {{ $content$ }}{{ $test_offset$ }}"

yields spans (11, 22), (13, 27) and (0, 18). ``end`` is the index of the last
character of the closing delimiter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from .autofill import AutofillFunc
from .filler import fill_template

VALUE_OPEN, VALUE_CLOSE = "{{ $", "$ }}"
AUTOFILL_OPEN, AUTOFILL_CLOSE = "{{ %", "% }}"


@dataclass(frozen=True)
class Placeholder:
    name: str
    start: int
    end: int
    is_autofill: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "is_autofill": self.is_autofill,
            "relative_span": [self.start, self.end],
        }


def _find_opener(content: str, pos: int) -> tuple[int, bool] | None:
    value_at = content.find(VALUE_OPEN, pos)
    autofill_at = content.find(AUTOFILL_OPEN, pos)
    if value_at < 0 and autofill_at < 0:
        return None
    if autofill_at < 0 or 0 <= value_at < autofill_at:
        return value_at, False
    if value_at < 0 or autofill_at < value_at:
        return autofill_at, True
    raise AssertionError("Both delimiter families cannot open at the same index")


def scan_placeholders(content: str) -> list[Placeholder]:
    """Find placeholders in first-occurrence order.

    An opener without a closing delimiter of its own family ends the scan;
    the rest of the content is literal text.
    """
    placeholders: list[Placeholder] = []
    cursor = 0
    while cursor < len(content):
        found = _find_opener(content, cursor)
        if found is None:
            break
        start, is_autofill = found
        opener, closer = (AUTOFILL_OPEN, AUTOFILL_CLOSE) if is_autofill else (VALUE_OPEN, VALUE_CLOSE)
        close_at = content.find(closer, start + len(opener))
        if close_at < 0:
            break
        end = close_at + len(closer) - 1
        placeholders.append(
            Placeholder(
                name=content[start + len(opener) : close_at],
                start=start - cursor,
                end=end - cursor,
                is_autofill=is_autofill,
            )
        )
        cursor = end + 1
    return placeholders


@dataclass(frozen=True)
class Template:
    """Raw template content with its placeholders, read-only once loaded."""

    content: str
    placeholders: tuple[Placeholder, ...] = ()

    @classmethod
    def from_text(cls, content: str) -> Template:
        return cls(content=content, placeholders=tuple(scan_placeholders(content)))

    def spans(self) -> Iterator[tuple[Placeholder, int, int]]:
        """Yield each placeholder with its absolute ``[start, stop)`` span."""
        cursor = 0
        for ph in self.placeholders:
            yield ph, cursor + ph.start, cursor + ph.end + 1
            cursor += ph.end + 1

    def names(self, autofill: bool = False) -> list[str]:
        return [ph.name for ph in self.placeholders if ph.is_autofill == autofill]

    def fill(
        self,
        values: Mapping[str, str] | None = None,
        autofill: Mapping[str, AutofillFunc] | None = None,
    ) -> str:
        return fill_template(self, values or {}, autofill)
