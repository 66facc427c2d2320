"""
Errors raised by the nulls package.

Every error raised by the value types is defined here.
Errors are raised synchronously to the caller and never retried.
"""

from typing import Any


class NullsError(Exception):
    """Base error for all nulls errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RangeError(NullsError, ValueError):
    """Raised when a timestamp's year cannot be rendered in the fixed layout."""

    def __init__(self, year: int) -> None:
        super().__init__(
            f"NullTime.marshal_json: year outside of range [0,9999]: {year}"
        )
        self.year = year


class FormatError(NullsError, ValueError):
    """Raised when text does not match the fixed timestamp layout."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"cannot parse {text!r} as NullTime: {reason}")
        self.text = text
        self.reason = reason


class ScanError(NullsError, TypeError):
    """Raised by a strict scan when the driver value is neither a timestamp nor NULL."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"NullTime.scan: unsupported driver value of type {type(value).__name__}"
        )
        self.value = value
