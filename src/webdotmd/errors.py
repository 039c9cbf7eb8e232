"""Exception hierarchy for document parsing, template filling and rendering.

Every error is fatal for the unit being processed (one document or one render
pass). Callers decide whether to abort a whole site build or skip the unit.
"""


class WebdotmdError(Exception):
    """Base exception for all webdotmd errors."""


class MetadataError(WebdotmdError, ValueError):
    """Raised for a malformed metadata header."""


class MissingRequiredKeyError(MetadataError):
    """Raised when a required metadata key (e.g. ``template``) is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Every page must specify '{key}' in metadata")
        self.key = key


class StructuralParseError(WebdotmdError, ValueError):
    """Raised when a block violates the shape its recognizer requires."""


class TemplateResolutionError(WebdotmdError, LookupError):
    """Raised when a template or a placeholder value cannot be resolved."""


class TemplateNotFoundError(TemplateResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Template not found: {name}")
        self.name = name


class MissingValueError(TemplateResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No value supplied for placeholder: {name}")
        self.name = name


class MissingAutofillError(TemplateResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No autofill function registered for placeholder: {name}")
        self.name = name
