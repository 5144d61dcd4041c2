"""Timezone lookup backed by the host timezone database (zoneinfo/tzdata)."""

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zonestamp.errors import InvalidZoneError

UTC = ZoneInfo("UTC")


def resolve_zone(zone: tzinfo | str | None) -> tzinfo:
    """
    Return a tzinfo for a zone object or an IANA zone name.

    Args:
        zone: tzinfo instance or IANA name such as "Europe/Moscow".

    Returns:
        The tzinfo. ZoneInfo caches instances, so repeated lookups of the
        same name return the same object.

    Raises:
        InvalidZoneError: If zone is None, empty or unknown.
    """
    if zone is None or zone == "":
        msg = "empty time location"
        raise InvalidZoneError(msg)
    if isinstance(zone, tzinfo):
        return zone
    if isinstance(zone, str):
        try:
            return ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            msg = f"unknown time location: {zone!r}"
            raise InvalidZoneError(msg) from e
    msg = f"expected tzinfo or zone name, got {type(zone).__name__}"
    raise InvalidZoneError(msg)


def zone_name(zone: tzinfo) -> str:
    """Human-readable identifier of a zone (IANA key where available)."""
    key = getattr(zone, "key", None)
    if key:
        return str(key)
    return str(zone)
