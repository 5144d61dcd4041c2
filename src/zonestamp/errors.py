"""
Error taxonomy for timestamp handling.

Every error derives from ZonestampError and from the builtin exception
callers would naturally catch for the same condition.
"""

from typing import Any


class ZonestampError(Exception):
    """Base class for all zonestamp errors."""


class InvalidZoneError(ZonestampError, ValueError):
    """A zone-sensitive operation was given no zone or an unknown zone."""


class TimestampParseError(ZonestampError, ValueError):
    """Text does not match any accepted timestamp layout."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"cannot parse {text!r} as timestamp: {reason}")


class UnsupportedTypeError(ZonestampError, TypeError):
    """A scan received a value that is neither a datetime nor text."""

    def __init__(self, value: Any) -> None:
        self.value_type = type(value)
        super().__init__(
            f"expected value type datetime or str but actual {self.value_type.__name__}"
        )
