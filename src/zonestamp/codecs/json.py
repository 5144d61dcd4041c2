"""
Object-notation codec: timestamps as JSON string fields.

Besides the raw encode/decode functions, TimestampField makes Timestamp a
pydantic field type. A plain ``Timestamp`` annotation uses the UTC policy;
``Annotated[Timestamp, TimestampField(policy)]`` applies another one.
"""

import json
from dataclasses import dataclass
from datetime import tzinfo
from typing import Annotated, Any

from pydantic_core import core_schema

from zonestamp.codecs.sql import scan
from zonestamp.config.settings import MOSCOW_POLICY, UTC_POLICY, ZonePolicy
from zonestamp.errors import TimestampParseError, UnsupportedTypeError
from zonestamp.timestamp import Timestamp
from zonestamp.zones import resolve_zone


def encode_json_custom(
    ts: Timestamp,
    zone: tzinfo | str | None,
    layout: str,
) -> str:
    """Render ts in zone with layout as a JSON string literal."""
    return json.dumps(ts.encode(zone, layout))


def encode_json(ts: Timestamp, policy: ZonePolicy = UTC_POLICY) -> str:
    """Render ts in the policy's output zone as a JSON string literal."""
    return encode_json_custom(ts, policy.output_tz, policy.layout)


def decode_json_custom(data: str | bytes, zone: tzinfo | str | None) -> Timestamp:
    """
    Decode a JSON value holding a timestamp.

    Args:
        data: JSON text, e.g. '"2018-01-25T16:24:28+05:00"'.
        zone: Default zone.

    Returns:
        Timestamp stored in zone. JSON null decodes to the zero-instant.

    Raises:
        InvalidZoneError: If zone is None or unknown.
        TimestampParseError: If data is not valid JSON or the text does not
            match an accepted layout.
        UnsupportedTypeError: If the JSON value is neither string nor null.
    """
    tz = resolve_zone(zone)
    raw = data.decode("utf-8") if isinstance(data, bytes) else data
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TimestampParseError(raw, f"invalid JSON: {e.msg}") from e
    if decoded is None:
        return Timestamp.zero(tz)
    if not isinstance(decoded, str):
        raise UnsupportedTypeError(decoded)
    return Timestamp.from_string(decoded, tz)


def decode_json(data: str | bytes, policy: ZonePolicy = UTC_POLICY) -> Timestamp:
    """Decode a JSON value with the policy's input zone."""
    return decode_json_custom(data, policy.input_tz)


@dataclass(frozen=True)
class TimestampField:
    """pydantic annotation binding a Timestamp field to a ZonePolicy."""

    policy: ZonePolicy = UTC_POLICY

    def __get_pydantic_core_schema__(self, source_type: Any, handler: Any) -> Any:
        return core_schema.no_info_plain_validator_function(
            self.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                self.serialize, return_schema=core_schema.str_schema()
            ),
        )

    def __get_pydantic_json_schema__(self, schema: Any, handler: Any) -> dict[str, Any]:
        return {"type": "string", "format": "date-time"}

    def validate(self, value: Any) -> Timestamp:
        """Accept a Timestamp, a datetime or timestamp text."""
        if isinstance(value, Timestamp):
            return value.in_zone(self.policy.input_tz)
        try:
            return scan(value, self.policy)
        except UnsupportedTypeError as e:
            # pydantic only reports ValueError as a validation error
            raise ValueError(str(e)) from e

    def serialize(self, value: Timestamp) -> str:
        """Canonical text in the policy's output zone."""
        return value.encode(self.policy.output_tz, self.policy.layout)


MoscowTimestamp = Annotated[Timestamp, TimestampField(MOSCOW_POLICY)]
