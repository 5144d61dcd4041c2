"""
Zonestamp: time-zone normalized timestamps.

This package provides a Timestamp value type that is held in a default
time zone and encoded in a canonical ISO 8601 layout for XML, JSON and
database interchange.
"""

from importlib.metadata import version

from zonestamp.codecs import MoscowTimestamp, TimestampField
from zonestamp.config import MOSCOW_POLICY, UTC_POLICY, ZonePolicy
from zonestamp.errors import (
    InvalidZoneError,
    TimestampParseError,
    UnsupportedTypeError,
    ZonestampError,
)
from zonestamp.layout import CANONICAL_LAYOUT, DISPLAY_LAYOUT, NAIVE_LAYOUT
from zonestamp.timestamp import Timestamp
from zonestamp.zones import UTC, resolve_zone

__version__ = version("zonestamp")

__all__ = [
    "CANONICAL_LAYOUT",
    "DISPLAY_LAYOUT",
    "MOSCOW_POLICY",
    "NAIVE_LAYOUT",
    "UTC",
    "UTC_POLICY",
    "InvalidZoneError",
    "MoscowTimestamp",
    "Timestamp",
    "TimestampField",
    "TimestampParseError",
    "UnsupportedTypeError",
    "ZonePolicy",
    "ZonestampError",
    "__version__",
    "resolve_zone",
]
