"""
Timestamp value type.

A Timestamp wraps one aware datetime that is always expressed in the zone
chosen when it was built. Serialization re-projects it into an output zone;
the stored zone itself never changes except through in_zone().
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from zonestamp.errors import InvalidZoneError
from zonestamp.layout import CANONICAL_LAYOUT, DISPLAY_LAYOUT, parse_text, render
from zonestamp.zones import UTC, resolve_zone, zone_name

_DAY = timedelta(hours=24)


def add_months(dt: datetime, months: int) -> datetime:
    """
    Add calendar months, clamping the day to the target month's last day.

    Jan 31 + 1 month is Feb 28 (or 29), never a day in March.

    Raises:
        ValueError: If the result falls after year 9999.
    """
    index = dt.month - 1 + months
    year, month = dt.year + index // 12, index % 12 + 1
    day = min(dt.day, _month_span(year, month, 1))
    return dt.replace(year=year, month=month, day=day)


def _month_span(year: int, month: int, months: int) -> int:
    """Number of days in months consecutive calendar months from year-month."""
    days = 0
    for _ in range(months):
        days += calendar.mdays[month] + (month == 2 and calendar.isleap(year))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return days


def _zone_key(zone: tzinfo | None) -> Any:
    return getattr(zone, "key", zone)


@dataclass(frozen=True, eq=False)
class Timestamp:
    """A point in time held in a fixed default zone."""

    value: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.value, datetime):
            msg = f"Timestamp value must be a datetime, got {type(self.value).__name__}"
            raise TypeError(msg)
        if self.value.tzinfo is None or self.value.utcoffset() is None:
            msg = "Timestamp value must carry a time location"
            raise InvalidZoneError(msg)

    # Construction

    @classmethod
    def from_native(cls, dt: datetime, zone: tzinfo | str | None) -> "Timestamp":
        """
        Re-express an existing datetime in zone.

        Naive datetimes are read as UTC, the way database drivers hand them
        back.
        """
        tz = resolve_zone(zone)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(dt.astimezone(tz))

    @classmethod
    def now(cls, zone: tzinfo | str | None = UTC) -> "Timestamp":
        """Current instant in zone."""
        return cls.from_native(datetime.now(timezone.utc), zone)

    @classmethod
    def zero(cls, zone: tzinfo | str | None) -> "Timestamp":
        """
        Zero-instant 0001-01-01T00:00:00Z expressed in zone.

        West of UTC that instant has no representable wall clock, so the
        wall clock 0001-01-01T00:00:00 in zone is used instead.
        """
        tz = resolve_zone(zone)
        try:
            return cls(datetime(1, 1, 1, tzinfo=timezone.utc).astimezone(tz))
        except OverflowError:
            return cls(datetime(1, 1, 1, tzinfo=tz))

    @classmethod
    def from_string(cls, text: str, zone: tzinfo | str | None) -> "Timestamp":
        """
        Parse text with zone as the default zone.

        Empty text yields the zero-instant. Zone-naive text is wall clock in
        zone; text with a "Z" or "+hh:mm" suffix keeps its own offset and is
        then re-projected into zone.

        Raises:
            InvalidZoneError: If zone is None or unknown.
            TimestampParseError: If text matches no accepted layout.
        """
        tz = resolve_zone(zone)
        if text == "":
            return cls.zero(tz)
        return cls(parse_text(text, tz))

    # Accessors

    @property
    def zone(self) -> tzinfo:
        """Zone the value is stored in."""
        tz = self.value.tzinfo
        assert tz is not None
        return tz

    def is_zero(self) -> bool:
        """True for the zero-instant of the stored zone."""
        return self.equal(Timestamp.zero(self.zone))

    def in_zone(self, zone: tzinfo | str | None) -> "Timestamp":
        """Same instant stored in another zone."""
        return Timestamp.from_native(self.value, zone)

    # Formatting

    def format(self, layout: str | None = None) -> str:
        """
        Format in the stored zone.

        Args:
            layout: strftime layout; defaults to "YYYY-MM-DD hh:mm:ss TZ".
        """
        return render(self.value, DISPLAY_LAYOUT if layout is None else layout)

    def encode(self, zone: tzinfo | str | None, layout: str = CANONICAL_LAYOUT) -> str:
        """
        Re-project into zone and format with layout.

        Every codec goes through this routine.

        Raises:
            InvalidZoneError: If zone is None or unknown.
        """
        return render(self.value.astimezone(resolve_zone(zone)), layout)

    def __str__(self) -> str:
        return render(self.value, CANONICAL_LAYOUT)

    def __repr__(self) -> str:
        return f"Timestamp({self}, zone={zone_name(self.zone)!r})"

    # Arithmetic

    def add(self, delta: timedelta) -> "Timestamp":
        """Translate by an absolute duration, keeping the zone."""
        moved = self.value.astimezone(timezone.utc) + delta
        return Timestamp(moved.astimezone(self.zone))

    def add_months(self, months: int) -> "Timestamp":
        """Add calendar months with a clamped day of month."""
        return Timestamp(add_months(self.value, months))

    def __add__(self, other: object) -> "Timestamp":
        if isinstance(other, timedelta):
            return self.add(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: object) -> Any:
        if isinstance(other, timedelta):
            return self.add(-other)
        if isinstance(other, Timestamp):
            return self.value.astimezone(timezone.utc) - other.value.astimezone(
                timezone.utc
            )
        return NotImplemented

    def _days_until_month_boundary(self, months: int) -> int:
        start = self.value
        try:
            # Day 1 of the current month at the same time of day
            end = add_months(start.replace(day=1), months)
        except ValueError:
            # Boundary after 9999-12-31 has no wall clock; offset taken as unchanged
            return _month_span(start.year, start.month, months) - start.day + 1
        elapsed = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
        # elapsed is always positive, so floor and truncation agree
        return elapsed // _DAY

    def days_until_end_of_month(self) -> int:
        """Whole days from now to the first day of the next month."""
        return self._days_until_month_boundary(1)

    def days_until_end_of_next_month(self) -> int:
        """Whole days from now to the first day of the month after next."""
        return self._days_until_month_boundary(2)

    # Comparison

    def equal(self, other: "Timestamp") -> bool:
        """
        Structural equality: same wall clock, offset and zone.

        The same physical instant stored in two zones is not equal.
        """
        left, right = self.value, other.value
        return (
            left.replace(tzinfo=None) == right.replace(tzinfo=None)
            and left.utcoffset() == right.utcoffset()
            and _zone_key(left.tzinfo) == _zone_key(right.tzinfo)
        )

    def deep_equal(self, other: "Timestamp") -> bool:
        """Same physical instant, zone ignored."""
        return self.value.astimezone(timezone.utc) == other.value.astimezone(
            timezone.utc
        )

    def equal_native(self, other: datetime) -> bool:
        """Structural equality against a plain aware datetime."""
        if other.tzinfo is None:
            return False
        return self.equal(Timestamp(other))

    def before(self, other: "Timestamp") -> bool:
        # Same-zone datetimes compare by wall clock and ignore fold
        return self.value.astimezone(timezone.utc) < other.value.astimezone(
            timezone.utc
        )

    def after(self, other: "Timestamp") -> bool:
        return self.value.astimezone(timezone.utc) > other.value.astimezone(
            timezone.utc
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.equal(other)

    def __hash__(self) -> int:
        return hash(
            (
                self.value.replace(tzinfo=None),
                self.value.utcoffset(),
                _zone_key(self.value.tzinfo),
            )
        )

    # pydantic field support (UTC policy); see zonestamp.codecs.json

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from zonestamp.codecs.json import TimestampField

        return TimestampField().__get_pydantic_core_schema__(source_type, handler)

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
        return {"type": "string", "format": "date-time"}
