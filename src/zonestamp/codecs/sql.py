"""
Database binding: scan driver values into Timestamps and back.

register_sqlite() wires the pair into the sqlite3 module so that columns
declared with the registered type name round-trip as Timestamps.
"""

import sqlite3
from datetime import datetime, tzinfo
from typing import Any

from zonestamp.config.settings import UTC_POLICY, ZonePolicy
from zonestamp.errors import UnsupportedTypeError
from zonestamp.timestamp import Timestamp
from zonestamp.utils.logging import get_logger

log = get_logger(__name__)


def scan_custom(src: Any, zone: tzinfo | str | None) -> Timestamp:
    """
    Build a Timestamp from a driver value.

    Args:
        src: datetime (re-zoned), str (parsed) or UTF-8 bytes (parsed).
        zone: Default zone.

    Returns:
        Timestamp stored in zone.

    Raises:
        UnsupportedTypeError: For any other value type.
    """
    if isinstance(src, datetime):
        return Timestamp.from_native(src, zone)
    if isinstance(src, bytes):
        src = src.decode("utf-8")
    if isinstance(src, str):
        return Timestamp.from_string(src, zone)
    raise UnsupportedTypeError(src)


def scan(src: Any, policy: ZonePolicy = UTC_POLICY) -> Timestamp:
    """Build a Timestamp from a driver value using the policy's input zone."""
    return scan_custom(src, policy.input_tz)


def value(ts: Timestamp) -> datetime:
    """Native datetime to hand to a driver."""
    return ts.value


def register_sqlite(
    policy: ZonePolicy = UTC_POLICY,
    typename: str = "TIMESTAMPTZ",
) -> None:
    """
    Register sqlite3 adapter and converter for Timestamp.

    Stored text is the policy's layout in its output zone. Reading requires
    a connection opened with detect_types=sqlite3.PARSE_DECLTYPES and a
    column declared as typename.

    Args:
        policy: Zones and layout for storing and reading.
        typename: Declared column type the converter is bound to.
    """
    sqlite3.register_adapter(
        Timestamp, lambda ts: ts.encode(policy.output_tz, policy.layout)
    )
    sqlite3.register_converter(typename, lambda raw: scan(raw, policy))
    log.debug(
        "Registered sqlite3 timestamp binding",
        typename=typename,
        input_zone=policy.input_zone,
        output_zone=policy.output_zone,
    )
