"""Template filler: single left-to-right pass over the template content."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from loguru import logger

from ..errors import MissingAutofillError, MissingValueError
from .autofill import AutofillFunc, merge_autofill

if TYPE_CHECKING:
    from .placeholders import Template


def fill_template(
    template: Template,
    values: Mapping[str, str],
    autofill: Mapping[str, AutofillFunc] | None = None,
) -> str:
    """Splice values into every placeholder of ``template``.

    Value placeholders are looked up in ``values``; autofill placeholders call
    the matching function from the built-ins merged with ``autofill``. A missing
    value or function is fatal.
    """
    funcs = merge_autofill(autofill)
    parts: list[str] = []
    content = template.content
    cursor = 0
    for placeholder in template.placeholders:
        parts.append(content[cursor : cursor + placeholder.start])
        if placeholder.is_autofill:
            func = funcs.get(placeholder.name)
            if func is None:
                raise MissingAutofillError(placeholder.name)
            parts.append(func())
        else:
            if placeholder.name not in values:
                raise MissingValueError(placeholder.name)
            parts.append(values[placeholder.name])
        cursor += placeholder.end + 1
    parts.append(content[cursor:])
    logger.debug(f"Filled {len(template.placeholders)} placeholders")
    return "".join(parts)
