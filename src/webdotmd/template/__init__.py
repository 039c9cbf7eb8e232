"""Template engine: placeholder scanning, filling and autofill functions."""

from .autofill import BUILTIN_AUTOFILL, AutofillFunc, constant, merge_autofill
from .filler import fill_template
from .placeholders import Placeholder, Template, scan_placeholders

__all__ = [
    "BUILTIN_AUTOFILL",
    "AutofillFunc",
    "constant",
    "merge_autofill",
    "fill_template",
    "Placeholder",
    "Template",
    "scan_placeholders",
]
