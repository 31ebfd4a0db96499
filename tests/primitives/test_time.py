"""Tests for the FHIR time primitive."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from zhfhir.primitives import Date, FormatError, ParseError, Precision, Time


class TestTimeValidation:
    @pytest.mark.parametrize(
        "text",
        ["00:00:00", "10:30:00", "23:59:59", "10:30:00.5", "10:30:00.123456789012"],
    )
    def test_accepts(self, text: str) -> None:
        assert Time(text).precision() is Precision.SECOND

    @pytest.mark.parametrize(
        "text",
        [
            "24:00:00",
            "10:30:60",
            "10:60:00",
            "10:30",
            "1:30:00",
            "10:30:00.",
            "10:30:00Z",
            "10:30:00+06:00",
            "T10:30:00",
        ],
    )
    def test_rejects(self, text: str) -> None:
        with pytest.raises(FormatError, match="invalid FHIR time format"):
            Time(text)

    def test_empty_rejected(self) -> None:
        with pytest.raises(FormatError, match="time cannot be empty"):
            Time("")


class TestTimeResolution:
    def test_to_timedelta(self) -> None:
        assert Time("10:30:15").to_timedelta() == timedelta(hours=10, minutes=30, seconds=15)

    def test_fraction_is_kept_to_microseconds(self) -> None:
        assert Time("00:00:01.1234567").to_timedelta() == timedelta(
            seconds=1, microseconds=123456
        )

    def test_total_nanoseconds_is_lossless_to_nine_digits(self) -> None:
        assert Time("00:00:00.123456789").total_nanoseconds() == 123_456_789
        assert Time("01:00:00.5").total_nanoseconds() == 3_600_500_000_000

    def test_absent_fails(self) -> None:
        with pytest.raises(ParseError):
            Time().to_timedelta()

    def test_resolve_on_naive_date(self) -> None:
        resolved = Time("10:30:00").resolve_on_date(date(2024, 1, 15))
        assert resolved == datetime(2024, 1, 15, 10, 30)
        assert resolved.tzinfo is None

    def test_resolve_keeps_caller_timezone(self) -> None:
        dhaka = timezone(timedelta(hours=6))
        resolved = Time("10:30:00").resolve_on_date(datetime(2024, 1, 15, 18, 0, tzinfo=dhaka))
        assert resolved == datetime(2024, 1, 15, 10, 30, tzinfo=dhaka)
        assert resolved.utcoffset() == timedelta(hours=6)

    def test_resolve_adds_elapsed_time_across_dst_start(self) -> None:
        new_york = ZoneInfo("America/New_York")
        day = datetime(2024, 3, 10, tzinfo=new_york)

        resolved = Time("03:00:00").resolve_on_date(day)

        assert resolved.hour == 4
        assert resolved.utcoffset() == timedelta(hours=-4)
        assert resolved.astimezone(UTC) - day.astimezone(UTC) == timedelta(hours=3)

    def test_resolve_before_dst_start_keeps_wall_clock(self) -> None:
        new_york = ZoneInfo("America/New_York")
        resolved = Time("01:30:00").resolve_on_date(datetime(2024, 3, 10, tzinfo=new_york))
        assert (resolved.hour, resolved.minute) == (1, 30)
        assert resolved.utcoffset() == timedelta(hours=-5)


class TestTimeConstruction:
    def test_from_duration_whole_seconds(self) -> None:
        assert Time.from_duration(timedelta(hours=9, minutes=5, seconds=7)).text == "09:05:07"

    def test_from_duration_fraction_is_nine_digits(self) -> None:
        assert Time.from_duration(timedelta(seconds=1, microseconds=500_000)).text == (
            "00:00:01.500000000"
        )

    def test_from_duration_nanoseconds(self) -> None:
        assert Time.from_duration(123_456_789).text == "00:00:00.123456789"

    def test_from_duration_wraps_past_a_day(self) -> None:
        assert Time.from_duration(timedelta(days=1, hours=2)).text == "02:00:00"

    def test_from_duration_negative_counts_back_from_midnight(self) -> None:
        assert Time.from_duration(timedelta(seconds=-1)).text == "23:59:59"
        assert Time.from_duration(-1).text == "23:59:59.999999999"

    def test_from_datetime_whole_second(self) -> None:
        assert Time.from_datetime(datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)).text == (
            "10:30:00"
        )

    def test_from_datetime_strips_trailing_zeros(self) -> None:
        assert Time.from_datetime(datetime(2024, 1, 15, 10, 30, 0, 120_000)).text == (
            "10:30:00.12"
        )

    def test_from_time(self) -> None:
        assert Time.from_datetime(time(7, 8, 9, 1)).text == "07:08:09.000001"

    def test_from_datetime_with_nanoseconds(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, 0)
        assert Time.from_datetime(moment, nanosecond=123_456_789).text == "10:30:00.123456789"

    @pytest.mark.parametrize("nanosecond", [-1, 1_000_000_000])
    def test_from_datetime_rejects_out_of_range_nanoseconds(self, nanosecond: int) -> None:
        with pytest.raises(FormatError, match="out of range"):
            Time.from_datetime(datetime(2024, 1, 15, 10, 30), nanosecond=nanosecond)

    def test_round_trip_through_duration(self) -> None:
        value = Time("13:14:15.5")
        assert Time.from_duration(value.to_timedelta()).to_timedelta() == value.to_timedelta()


class TestTimeValueObject:
    def test_trailing_zeros_are_significant(self) -> None:
        assert Time("10:30:00.5") != Time("10:30:00.500")

    def test_not_equal_across_types(self) -> None:
        assert Time.must("10:30:00") != Date.must("2024")
