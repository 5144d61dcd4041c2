"""Tests for the Timestamp value type."""

from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

import pytest

from zonestamp import UTC, InvalidZoneError, Timestamp, TimestampParseError
from zonestamp.layout import CANONICAL_LAYOUT, NAIVE_LAYOUT
from zonestamp.timestamp import add_months


class TestConstruction:
    """Tests for from_native, now, zero and from_string."""

    def test_from_native_rezones(self, utc_instant: datetime, moscow: tzinfo) -> None:
        """Test that the stored zone is the requested zone."""
        ts = Timestamp.from_native(utc_instant, moscow)
        assert ts.zone is moscow
        assert str(ts) == "2018-01-25T14:24:28+03:00"

    def test_from_native_accepts_zone_name(self, utc_instant: datetime) -> None:
        """Test that an IANA name is resolved."""
        ts = Timestamp.from_native(utc_instant, "Europe/Moscow")
        assert str(ts) == "2018-01-25T14:24:28+03:00"

    def test_from_native_naive_is_utc(self) -> None:
        """Test that a naive datetime is read as UTC."""
        ts = Timestamp.from_native(datetime(2018, 1, 1, 12, 0, 0), "Europe/Moscow")
        assert str(ts) == "2018-01-01T15:00:00+03:00"

    def test_from_native_without_zone(self, utc_instant: datetime) -> None:
        """Test that a missing zone fails instead of defaulting."""
        with pytest.raises(InvalidZoneError, match="empty time location"):
            Timestamp.from_native(utc_instant, None)

    def test_unknown_zone(self, utc_instant: datetime) -> None:
        """Test that an unknown zone name fails."""
        with pytest.raises(InvalidZoneError, match="Mars/Olympus"):
            Timestamp.from_native(utc_instant, "Mars/Olympus")

    def test_now(self) -> None:
        """Test that now() is stored in UTC by default."""
        before = datetime.now(timezone.utc)
        ts = Timestamp.now()
        after = datetime.now(timezone.utc)
        assert ts.zone is UTC
        assert before <= ts.value <= after

    def test_now_in_zone(self, moscow: tzinfo) -> None:
        """Test that now() honours the zone argument."""
        assert Timestamp.now(moscow).zone is moscow

    def test_constructor_requires_aware_value(self) -> None:
        """Test that a naive datetime cannot be wrapped directly."""
        with pytest.raises(InvalidZoneError):
            Timestamp(datetime(2018, 1, 1))

    def test_constructor_requires_datetime(self) -> None:
        """Test that non-datetime values are rejected."""
        with pytest.raises(TypeError):
            Timestamp("2018-01-01T00:00:00")  # type: ignore[arg-type]


class TestParsing:
    """Tests for Timestamp.from_string."""

    def test_empty_is_zero_instant(self) -> None:
        """Test that empty text yields the zero-instant, not an error."""
        ts = Timestamp.from_string("", UTC)
        assert str(ts) == "0001-01-01T00:00:00Z"
        assert ts.is_zero()

    def test_empty_in_eastern_zone(self, moscow: tzinfo) -> None:
        """Test that the zero-instant is re-expressed in the zone."""
        ts = Timestamp.from_string("", moscow)
        assert ts.zone is moscow
        assert ts.value.astimezone(timezone.utc) == datetime(1, 1, 1, tzinfo=timezone.utc)
        assert ts.is_zero()

    def test_empty_in_western_zone(self) -> None:
        """Test that zones west of UTC fall back to the zero wall clock."""
        new_york = ZoneInfo("America/New_York")
        ts = Timestamp.from_string("", new_york)
        assert ts.zone is new_york
        assert ts.value.replace(tzinfo=None) == datetime(1, 1, 1)
        assert ts.is_zero()

    def test_naive_text(self, moscow: tzinfo) -> None:
        """Test that zone-naive text is wall clock in the default zone."""
        ts = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        assert str(ts) == "2018-01-25T16:24:28+03:00"

    def test_naive_text_with_fraction(self, moscow: tzinfo) -> None:
        """Test that fractional seconds are kept but not rendered."""
        ts = Timestamp.from_string("2018-01-25T16:24:28.74", moscow)
        assert ts.value.microsecond == 740000
        assert str(ts) == "2018-01-25T16:24:28+03:00"
        assert ts.format("%S.%f") == "28.740000"

    def test_offset_text_converted_to_zone(self, moscow: tzinfo) -> None:
        """Test that an explicit offset is converted into the default zone."""
        ts = Timestamp.from_string("2018-01-25T16:24:28+05:00", moscow)
        assert str(ts) == "2018-01-25T14:24:28+03:00"

    def test_offset_text_with_fraction(self, moscow: tzinfo) -> None:
        """Test an explicit offset together with fractional seconds."""
        ts = Timestamp.from_string("2018-01-25T16:24:28.74+05:00", moscow)
        assert str(ts) == "2018-01-25T14:24:28+03:00"
        assert ts.deep_equal(
            Timestamp.from_native(datetime(2018, 1, 25, 11, 24, 28, 740000), UTC)
        )

    def test_fraction_survives_subtraction(self) -> None:
        """Test that sub-second parts take part in elapsed time."""
        a = Timestamp.from_string("2018-01-25T16:24:28.25Z", UTC)
        b = Timestamp.from_string("2018-01-25T16:24:28.75Z", UTC)
        assert b - a == timedelta(milliseconds=500)

    def test_non_ascii_digits_rejected(self) -> None:
        """Test that digits from other scripts are not read as a year."""
        with pytest.raises(TimestampParseError):
            Timestamp.from_string("\u0662\u0660\u0661\u0668-01-25T16:24:28", UTC)

    def test_offset_text_encoded_in_utc(self) -> None:
        """Test the canonical UTC rendering of offset input."""
        ts = Timestamp.from_string("2018-01-25T16:24:28+05:00", UTC)
        assert ts.encode(UTC) == "2018-01-25T11:24:28Z"

    def test_naive_text_in_fixed_offset(self, plus_three: tzinfo) -> None:
        """Test zone-naive input in UTC+3 encoded for interchange."""
        ts = Timestamp.from_string("2018-01-25T16:24:28", plus_three)
        assert ts.encode(UTC) == "2018-01-25T13:24:28Z"

    def test_zulu_text(self, moscow: tzinfo) -> None:
        """Test that a Z suffix is read as UTC."""
        ts = Timestamp.from_string("2018-01-25T16:24:28Z", moscow)
        assert str(ts) == "2018-01-25T19:24:28+03:00"

    def test_round_trip(self) -> None:
        """Test that zone-naive text is reproduced by the naive layout."""
        for zone in ("UTC", "Europe/Moscow", "America/Sao_Paulo", "Asia/Kolkata"):
            for text in ("2018-01-25T16:24:28", "2020-02-29T00:00:00"):
                ts = Timestamp.from_string(text, zone)
                assert ts.encode(zone, NAIVE_LAYOUT) == text

    def test_parse_error(self) -> None:
        """Test that unparseable text raises TimestampParseError."""
        with pytest.raises(TimestampParseError) as exc_info:
            Timestamp.from_string("yesterday", UTC)
        assert exc_info.value.text == "yesterday"

    def test_missing_zone(self) -> None:
        """Test that parsing without a zone fails, even for empty text."""
        with pytest.raises(InvalidZoneError):
            Timestamp.from_string("2018-01-25T16:24:28", None)
        with pytest.raises(InvalidZoneError):
            Timestamp.from_string("", None)


class TestFormatting:
    """Tests for format, encode and string conversion."""

    def test_default_layout(self, moscow: tzinfo) -> None:
        """Test the human-readable default layout."""
        ts = Timestamp.from_string("2018-02-01T14:12:18", moscow)
        assert ts.format() == "2018-02-01 14:12:18 MSK"

    def test_default_layout_utc(self) -> None:
        """Test the default layout for UTC."""
        ts = Timestamp.from_string("2018-02-01T14:12:18", UTC)
        assert ts.format() == "2018-02-01 14:12:18 UTC"

    def test_custom_layout(self, moscow: tzinfo) -> None:
        """Test that a custom layout is applied in the stored zone."""
        ts = Timestamp.from_string("2018-02-01T14:12:18Z", moscow)
        assert ts.format(CANONICAL_LAYOUT) == "2018-02-01T17:12:18+03:00"
        assert ts.format("%d.%m.%Y") == "01.02.2018"

    def test_encode_reprojects(self, moscow: tzinfo) -> None:
        """Test that encode renders in the requested zone."""
        ts = Timestamp.from_string("2018-02-01T14:12:18", moscow)
        assert ts.encode(UTC) == "2018-02-01T11:12:18Z"
        assert ts.encode("Asia/Tokyo") == "2018-02-01T20:12:18+09:00"

    def test_encode_without_zone(self) -> None:
        """Test that encoding without a zone fails."""
        ts = Timestamp.from_string("2018-02-01T14:12:18", UTC)
        with pytest.raises(InvalidZoneError):
            ts.encode(None)

    def test_repr(self, moscow: tzinfo) -> None:
        """Test that repr names the zone."""
        ts = Timestamp.from_string("2018-02-01T14:12:18", moscow)
        assert repr(ts) == "Timestamp(2018-02-01T14:12:18+03:00, zone='Europe/Moscow')"


class TestArithmetic:
    """Tests for add, subtraction and month arithmetic."""

    def test_add_keeps_zone(self, moscow: tzinfo) -> None:
        """Test that add translates the instant and keeps the zone."""
        ts = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        moved = ts.add(timedelta(hours=2))
        assert moved.zone is moscow
        assert str(moved) == "2018-01-25T18:24:28+03:00"

    def test_add_is_absolute_across_dst(self) -> None:
        """Test that one hour is one elapsed hour over a DST change."""
        ts = Timestamp.from_string("2018-03-25T01:30:00", "Europe/Berlin")
        moved = ts + timedelta(hours=1)
        assert moved.format(CANONICAL_LAYOUT) == "2018-03-25T03:30:00+02:00"

    def test_subtract(self, moscow: tzinfo) -> None:
        """Test timedelta and Timestamp subtraction."""
        later = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        earlier = later - timedelta(days=1)
        assert str(earlier) == "2018-01-24T16:24:28+03:00"
        assert later - earlier == timedelta(days=1)

    def test_subtract_across_zones(self, moscow: tzinfo) -> None:
        """Test that subtraction measures physical time."""
        a = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        b = Timestamp.from_string("2018-01-25T13:24:28", UTC)
        assert a - b == timedelta(0)

    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            (datetime(2018, 1, 31), 1, datetime(2018, 2, 28)),
            (datetime(2020, 1, 31), 1, datetime(2020, 2, 29)),
            (datetime(2018, 12, 15), 1, datetime(2019, 1, 15)),
            (datetime(2018, 3, 31), -1, datetime(2018, 2, 28)),
            (datetime(2018, 11, 30), 2, datetime(2019, 1, 30)),
        ],
    )
    def test_add_months_clamps(
        self, start: datetime, months: int, expected: datetime
    ) -> None:
        """Test calendar month addition with a clamped day of month."""
        assert add_months(start, months) == expected

    def test_add_months_method(self, moscow: tzinfo) -> None:
        """Test the Timestamp month helper keeps time and zone."""
        ts = Timestamp.from_string("2018-01-31T10:00:00", moscow)
        assert str(ts.add_months(1)) == "2018-02-28T10:00:00+03:00"


class TestMonthBoundaries:
    """Tests for days_until_end_of_month and days_until_end_of_next_month."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2018-02-01T00:00:00", 28),
            ("2018-02-15T14:00:04", 14),
            ("2018-05-01T00:00:00", 31),
            ("2018-05-01T12:15:55", 31),
            ("2018-05-02T12:15:55", 30),
            ("2018-05-03T12:15:55", 29),
            ("2018-05-04T12:15:55", 28),
            ("2018-12-25T12:15:55", 7),
            ("2018-12-30T12:15:55", 2),
        ],
    )
    @pytest.mark.parametrize("zone", ["UTC", "Europe/Moscow"])
    def test_end_of_month(self, text: str, expected: int, zone: str) -> None:
        """Test days until the end of the current month."""
        ts = Timestamp.from_string(text, zone)
        assert ts.days_until_end_of_month() == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2018-02-01T00:00:00", 59),
            ("2018-02-15T14:00:04", 45),
            ("2018-05-01T00:00:00", 61),
            ("2018-05-01T12:15:55", 61),
            ("2018-05-02T12:15:55", 60),
            ("2018-05-03T12:15:55", 59),
            ("2018-05-04T12:15:55", 58),
            ("2018-12-25T12:15:55", 38),
            ("2018-12-30T12:15:55", 33),
        ],
    )
    @pytest.mark.parametrize("zone", ["UTC", "Europe/Moscow"])
    def test_end_of_next_month(self, text: str, expected: int, zone: str) -> None:
        """Test days until the end of the next month."""
        ts = Timestamp.from_string(text, zone)
        assert ts.days_until_end_of_next_month() == expected

    def test_dst_month_truncates(self) -> None:
        """Test that a month losing an hour to DST counts whole days only."""
        # March 2018 in Berlin is 31 days minus one hour
        ts = Timestamp.from_string("2018-03-01T00:00:00", "Europe/Berlin")
        assert ts.days_until_end_of_month() == 30

    def test_last_representable_month(self) -> None:
        """Test day counts whose boundary falls after year 9999."""
        december = Timestamp.from_string("9999-12-15T00:00:00", UTC)
        assert december.days_until_end_of_month() == 17
        assert december.days_until_end_of_next_month() == 48
        november = Timestamp.from_string("9999-11-15T10:00:00", "Europe/Moscow")
        assert november.days_until_end_of_month() == 16
        assert november.days_until_end_of_next_month() == 47

    def test_add_months_past_year_9999(self) -> None:
        """Test that a month sum beyond the calendar raises ValueError."""
        ts = Timestamp.from_string("9999-12-15T00:00:00", UTC)
        with pytest.raises(ValueError, match="out of range"):
            ts.add_months(1)


class TestEquality:
    """Tests for equal, deep_equal and ordering."""

    def test_same_instant_different_zones(
        self, utc_instant: datetime, moscow: tzinfo
    ) -> None:
        """Test that zone matters for equal but not for deep_equal."""
        in_utc = Timestamp.from_native(utc_instant, UTC)
        in_moscow = Timestamp.from_native(utc_instant, moscow)
        assert in_utc.deep_equal(in_moscow)
        assert not in_utc.equal(in_moscow)
        assert in_utc != in_moscow

    def test_same_zone(self, utc_instant: datetime) -> None:
        """Test equality and hashing of identical values."""
        a = Timestamp.from_native(utc_instant, "Europe/Moscow")
        b = Timestamp.from_native(utc_instant, "Europe/Moscow")
        assert a.equal(b)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_fixed_offset_differs_from_named_zone(
        self, utc_instant: datetime, moscow: tzinfo, plus_three: tzinfo
    ) -> None:
        """Test that +03:00 and Europe/Moscow are different zones."""
        named = Timestamp.from_native(utc_instant, moscow)
        fixed = Timestamp.from_native(utc_instant, plus_three)
        assert str(named) == str(fixed)
        assert not named.equal(fixed)
        assert named.deep_equal(fixed)

    def test_equal_native(self, moscow: tzinfo) -> None:
        """Test structural comparison against a plain datetime."""
        ts = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        assert ts.equal_native(datetime(2018, 1, 25, 16, 24, 28, tzinfo=moscow))
        assert not ts.equal_native(datetime(2018, 1, 25, 13, 24, 28, tzinfo=timezone.utc))
        assert not ts.equal_native(datetime(2018, 1, 25, 16, 24, 28))

    def test_not_equal_to_other_types(self, utc_instant: datetime) -> None:
        """Test that comparison with a non-Timestamp is False."""
        assert Timestamp.from_native(utc_instant, UTC) != utc_instant

    def test_ordering(self, moscow: tzinfo) -> None:
        """Test before and after compare physical instants."""
        a = Timestamp.from_string("2018-01-25T16:00:00", moscow)
        b = Timestamp.from_string("2018-01-25T14:00:00", UTC)
        assert a.before(b)
        assert b.after(a)
        assert not a.after(b)

    def test_ordering_in_dst_overlap(self) -> None:
        """Test that ordering follows instants when a wall clock repeats."""
        # 2018-10-28 02:00-03:00 occurs twice in Berlin
        a = Timestamp.from_string("2018-10-28T00:30:00Z", "Europe/Berlin")
        b = Timestamp.from_string("2018-10-28T01:15:00Z", "Europe/Berlin")
        assert str(a) == "2018-10-28T02:30:00+02:00"
        assert str(b) == "2018-10-28T02:15:00+01:00"
        assert b - a == timedelta(minutes=45)
        assert a.before(b)
        assert b.after(a)
        assert not b.before(a)

    def test_in_zone(self, moscow: tzinfo) -> None:
        """Test re-zoning keeps the instant."""
        ts = Timestamp.from_string("2018-01-25T16:24:28", moscow)
        utc = ts.in_zone(UTC)
        assert str(utc) == "2018-01-25T13:24:28Z"
        assert utc.deep_equal(ts)
