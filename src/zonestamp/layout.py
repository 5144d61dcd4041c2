"""
Timestamp layouts: rendering and the two-stage ISO 8601 parser.

Layouts are strftime strings with two extra directives:

    %:z  numeric UTC offset, "+03:00"
    %:Z  "Z" for a zero offset, otherwise the same as %:z

%Y is always rendered with four digits, so the zero-instant reads "0001".

Accepted input (fractional seconds of any length are kept to microsecond
precision; the canonical layout has no decimal marker, so they are dropped
on output):

    YYYY-MM-DDThh:mm:ss[.fff]Z
    YYYY-MM-DDThh:mm:ss[.fff]+hh:mm
    YYYY-MM-DDThh:mm:ss[.fff]        (wall clock in the default zone)
"""

import re
from datetime import datetime, timedelta, timezone, tzinfo

from zonestamp.errors import TimestampParseError

CANONICAL_LAYOUT = "%Y-%m-%dT%H:%M:%S%:Z"
NAIVE_LAYOUT = "%Y-%m-%dT%H:%M:%S"
DISPLAY_LAYOUT = "%Y-%m-%d %H:%M:%S %Z"

_NAIVE_PATTERN = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?",
    re.ASCII,
)
_OFFSET_PATTERN = re.compile(
    r"Z|(?P<sign>[+-])(?P<hours>\d{2}):(?P<minutes>\d{2})", re.ASCII
)
_DIRECTIVE_PATTERN = re.compile(r"%(%|:z|:Z|Y)")


def _offset_text(dt: datetime, zulu: bool) -> str:
    offset = dt.utcoffset()
    if offset is None:
        msg = "cannot render a UTC offset for a naive datetime"
        raise ValueError(msg)
    total = int(offset.total_seconds())
    if zulu and total == 0:
        return "Z"
    sign = "-" if total < 0 else "+"
    minutes = abs(total) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def render(dt: datetime, layout: str) -> str:
    """
    Format a datetime with a layout.

    Args:
        dt: Aware datetime.
        layout: strftime layout, optionally using %:z / %:Z.

    Returns:
        Formatted text.
    """

    def replace(match: re.Match[str]) -> str:
        directive = match.group(1)
        if directive == "Y":
            return f"{dt.year:04d}"
        if directive == ":z":
            return _offset_text(dt, zulu=False)
        if directive == ":Z":
            return _offset_text(dt, zulu=True)
        return "%%"

    return dt.strftime(_DIRECTIVE_PATTERN.sub(replace, layout))


def parse_naive(text: str) -> tuple[datetime, str] | None:
    """
    Match the zone-naive layout at the start of text.

    Returns:
        (naive datetime with microseconds, unmatched remainder),
        or None when the prefix does not match the layout.

    Raises:
        TimestampParseError: If the fields are out of range.
    """
    match = _NAIVE_PATTERN.match(text)
    if match is None:
        return None
    fields = {
        name: int(match.group(name))
        for name in ("year", "month", "day", "hour", "minute", "second")
    }
    # Digits past the sixth are cut, not rounded
    fields["microsecond"] = int((match.group("fraction") or "").ljust(6, "0")[:6])
    try:
        value = datetime(**fields)
    except ValueError as e:
        raise TimestampParseError(text, str(e)) from e
    return value, text[match.end() :]


def parse_offset(text: str, suffix: str) -> tzinfo:
    """Parse a zone suffix ("Z" or "+hh:mm") into a fixed-offset tzinfo."""
    match = _OFFSET_PATTERN.fullmatch(suffix)
    if match is None:
        raise TimestampParseError(text, f"unexpected trailing text {suffix!r}")
    if match.group("sign") is None:
        return timezone.utc

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    if hours > 23 or minutes > 59:
        raise TimestampParseError(text, f"offset out of range {suffix!r}")
    offset = timedelta(hours=hours, minutes=minutes)
    return timezone(-offset if match.group("sign") == "-" else offset)


def parse_text(text: str, zone: tzinfo) -> datetime:
    """
    Parse timestamp text and express it in zone.

    A strict zone-naive match is tried first and read as wall clock in
    zone. If characters remain after it, they must be a zone suffix, and the
    embedded offset wins. Either way the instant is re-projected into zone.

    Args:
        text: Non-empty timestamp text.
        zone: Default and target zone.

    Returns:
        Aware datetime in zone.

    Raises:
        TimestampParseError: If no accepted layout matches.
    """
    parsed = parse_naive(text)
    if parsed is None:
        raise TimestampParseError(text, "expected YYYY-MM-DDThh:mm:ss")
    naive, rest = parsed

    if not rest:
        return naive.replace(tzinfo=zone)

    aware = naive.replace(tzinfo=parse_offset(text, rest))
    try:
        return aware.astimezone(zone)
    except OverflowError as e:
        raise TimestampParseError(text, "instant out of range") from e
