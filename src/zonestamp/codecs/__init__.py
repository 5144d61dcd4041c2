"""
Serialization channels for Timestamp.

Each channel has a default entry point taking a ZonePolicy and a "custom"
entry point taking an explicit zone (and layout, for encoding).
"""

from zonestamp.codecs.json import (
    MoscowTimestamp,
    TimestampField,
    decode_json,
    decode_json_custom,
    encode_json,
    encode_json_custom,
)
from zonestamp.codecs.sql import register_sqlite, scan, scan_custom, value
from zonestamp.codecs.xml import (
    decode_attribute,
    decode_attribute_custom,
    decode_element,
    decode_element_custom,
    encode_attribute,
    encode_attribute_custom,
    encode_element,
    encode_element_custom,
)

__all__ = [
    "MoscowTimestamp",
    "TimestampField",
    "decode_attribute",
    "decode_attribute_custom",
    "decode_element",
    "decode_element_custom",
    "decode_json",
    "decode_json_custom",
    "encode_attribute",
    "encode_attribute_custom",
    "encode_element",
    "encode_element_custom",
    "encode_json",
    "encode_json_custom",
    "register_sqlite",
    "scan",
    "scan_custom",
    "value",
]
