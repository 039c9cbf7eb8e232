"""Autofill registry: zero-argument functions resolving ``{{ %name% }}`` placeholders."""

from __future__ import annotations

from datetime import date
from typing import Callable, Mapping

AutofillFunc = Callable[[], str]


def hello() -> str:
    return "hello"


def curr_year() -> str:
    return str(date.today().year)


BUILTIN_AUTOFILL: dict[str, AutofillFunc] = {
    "hello": hello,
    "curr_year": curr_year,
}


def merge_autofill(overrides: Mapping[str, AutofillFunc] | None = None) -> dict[str, AutofillFunc]:
    """Built-ins merged with caller functions; the caller wins on a name collision."""
    funcs = dict(BUILTIN_AUTOFILL)
    if overrides:
        funcs.update(overrides)
    return funcs


def constant(value: str) -> AutofillFunc:
    """Wrap a fixed string as an autofill function."""
    return lambda: value
