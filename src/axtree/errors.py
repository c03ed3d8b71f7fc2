"""
Exception hierarchy for accessibility tree processing.

Parse errors carry the exact condition that failed so callers can report it.
Flatten errors carry the element count and the configured ceiling.
Element source errors (permission, application, window) are raised by
collaborators and propagated unchanged by the core.
"""

from enum import Enum
from typing import Optional


class AxTreeError(Exception):
    """Base exception for all axtree errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseErrorKind(str, Enum):
    """Kinds of query parse failure."""

    EMPTY_QUERY = "empty_query"
    INVALID_CONDITION = "invalid_condition"
    UNSUPPORTED_KEY = "unsupported_key"
    INVALID_VALUE = "invalid_value"
    INVALID_REGEX = "invalid_regex"


class QueryParseError(AxTreeError):
    """
    Raised when a query string cannot be compiled.

    Attributes:
        kind: Failure category
        condition: The exact condition substring that failed
        detail: Offending key, value or regex error message
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        condition: str = "",
        detail: Optional[str] = None,
    ):
        self.kind = kind
        self.condition = condition
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        if self.kind == ParseErrorKind.EMPTY_QUERY:
            return "Query is empty"
        if self.kind == ParseErrorKind.UNSUPPORTED_KEY:
            return f"Unsupported key '{self.detail}' in condition '{self.condition}'"
        if self.kind == ParseErrorKind.INVALID_VALUE:
            return f"Invalid value '{self.detail}' in condition '{self.condition}'"
        if self.kind == ParseErrorKind.INVALID_REGEX:
            return f"Invalid regex in condition '{self.condition}': {self.detail}"
        if self.detail:
            return f"Invalid condition '{self.condition}': {self.detail}"
        return f"Invalid condition '{self.condition}'"


class TooManyElementsError(AxTreeError):
    """Raised the moment a flatten would emit more than the element ceiling."""

    def __init__(self, found: int, limit: int):
        self.found = found
        self.limit = limit
        super().__init__(
            f"Too many UI elements ({found} exceeds limit of {limit}). "
            "Use a query to filter elements and retrieve only what you need."
        )


class PermissionDeniedError(AxTreeError):
    """Accessibility access has not been granted to this process."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Accessibility permission denied. Enable accessibility access "
            "for this application in System Settings."
        )


class ApplicationNotFoundError(AxTreeError):
    """No running application matches the requested identifier."""

    def __init__(self, app_identifier: str):
        self.app_identifier = app_identifier
        super().__init__(f"Application '{app_identifier}' not found")


class WindowNotFoundError(AxTreeError):
    """The requested window index is out of range."""

    def __init__(self, index: int, total: int):
        self.index = index
        self.total = total
        super().__init__(
            f"Window index {index} not found. Application has {total} window(s)."
        )


class DumpParseErrorKind(str, Enum):
    """Kinds of text dump parse failure."""

    EMPTY_INPUT = "empty_input"
    UNEXPECTED_END = "unexpected_end"


class DumpParseError(AxTreeError):
    """Raised when an accessibility text dump cannot be parsed."""

    def __init__(self, kind: DumpParseErrorKind):
        self.kind = kind
        if kind == DumpParseErrorKind.EMPTY_INPUT:
            message = "Input is empty"
        else:
            message = "Unexpected end of input while parsing"
        super().__init__(message)


class LightweightDecodeError(AxTreeError):
    """Raised when lightweight JSON does not describe a node tree."""
