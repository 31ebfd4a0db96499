"""Tests for the FHIR dateTime primitive."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from zhfhir.primitives import DateTime, FormatError, ParseError, Precision

DHAKA = timezone(timedelta(hours=6))


class TestDateTimeValidation:
    @pytest.mark.parametrize(
        ("text", "precision"),
        [
            ("2024", Precision.YEAR),
            ("2024-01", Precision.MONTH),
            ("2024-01-15", Precision.DAY),
            ("2024-01-15T10:30:00", Precision.SECOND),
            ("2024-01-15T10:30:00Z", Precision.SECOND),
            ("2024-01-15T10:30:00+06:00", Precision.SECOND),
            ("2024-01-15T10:30:00.123-05:30", Precision.SECOND),
            ("2024-01-15T10:30:00.123456789", Precision.SECOND),
        ],
    )
    def test_precision_labels(self, text: str, precision: Precision) -> None:
        assert DateTime(text).precision() is precision

    @pytest.mark.parametrize(
        "text",
        [
            "2024-01-15T10:30",
            "2024-01-15T10:30:00+0600",
            "2024-01-15T10:30:00+06",
            "2024-01-15 10:30:00",
            "2024-01-15T",
            "2024-01-15T10:30:00.Z",
            "2024-01-15T10:30:00z",
        ],
    )
    def test_rejects(self, text: str) -> None:
        with pytest.raises(FormatError, match="invalid FHIR dateTime format"):
            DateTime(text)

    def test_error_lists_accepted_shapes(self) -> None:
        with pytest.raises(FormatError, match="expected YYYY, YYYY-MM, YYYY-MM-DD"):
            DateTime("yesterday")


class TestDateTimeEquality:
    def test_zulu_and_zero_offset_differ(self) -> None:
        zulu = DateTime("2024-01-15T10:30:00Z")
        zero = DateTime("2024-01-15T10:30:00+00:00")
        assert zulu != zero
        assert zulu.to_datetime() == zero.to_datetime()

    def test_fraction_digits_are_significant(self) -> None:
        assert DateTime("2024-01-15T10:30:00.5Z") != DateTime("2024-01-15T10:30:00.500Z")

    def test_same_text_is_equal(self) -> None:
        assert DateTime("2024-01-15") == DateTime("2024-01-15")


class TestDateTimeResolution:
    def test_partial_values_resolve_to_naive_midnight(self) -> None:
        assert DateTime("2024").to_datetime() == datetime(2024, 1, 1)
        assert DateTime("2024-05").to_datetime() == datetime(2024, 5, 1)
        assert DateTime("2024-05-17").to_datetime() == datetime(2024, 5, 17)

    def test_offset_is_kept(self) -> None:
        resolved = DateTime("2024-01-15T10:30:00+06:00").to_datetime()
        assert resolved.utcoffset() == timedelta(hours=6)
        assert resolved == datetime(2024, 1, 15, 4, 30, tzinfo=UTC)

    def test_missing_offset_reads_as_utc(self) -> None:
        assert DateTime("2024-01-15T10:30:00").to_datetime() == datetime(
            2024, 1, 15, 10, 30, tzinfo=UTC
        )

    def test_fraction_with_zone(self) -> None:
        assert DateTime("2024-01-15T10:30:00.25Z").to_datetime() == datetime(
            2024, 1, 15, 10, 30, 0, 250_000, tzinfo=UTC
        )

    def test_fraction_without_zone(self) -> None:
        assert DateTime("2024-01-15T10:30:00.25").to_datetime() == datetime(
            2024, 1, 15, 10, 30, 0, 250_000, tzinfo=UTC
        )

    def test_fraction_past_microseconds_is_truncated(self) -> None:
        resolved = DateTime("2024-01-15T10:30:00.123456789Z").to_datetime()
        assert resolved.microsecond == 123456

    def test_impossible_calendar_timestamp(self) -> None:
        with pytest.raises(ParseError, match="invalid dateTime"):
            DateTime("2024-02-30T10:30:00Z").to_datetime()

    def test_impossible_calendar_date(self) -> None:
        with pytest.raises(ParseError):
            DateTime("2023-02-29").to_datetime()


class TestDateTimeConstruction:
    def test_full_precision_keeps_offset(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, 5, tzinfo=DHAKA)
        assert DateTime.from_datetime(moment).text == "2024-01-15T10:30:05+06:00"

    def test_full_precision_utc_is_zulu(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, 5, tzinfo=UTC)
        assert DateTime.from_datetime(moment).text == "2024-01-15T10:30:05Z"

    def test_full_precision_negative_offset(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(-timedelta(hours=5, minutes=30)))
        assert DateTime.from_datetime(moment).text == "2024-01-15T10:30:00-05:30"

    @pytest.mark.parametrize(
        ("offset", "suffix"),
        [
            (timedelta(hours=5, minutes=45), "+05:45"),
            (-timedelta(minutes=30), "-00:30"),
            (-timedelta(hours=9, minutes=30), "-09:30"),
        ],
    )
    def test_offset_minutes_keep_their_sign(self, offset: timedelta, suffix: str) -> None:
        moment = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(offset))
        assert DateTime.from_datetime(moment).text == f"2024-01-15T10:30:00{suffix}"

    @pytest.mark.parametrize(
        "offset",
        [-timedelta(hours=5, minutes=30, seconds=30), timedelta(hours=5, minutes=53, seconds=28)],
    )
    def test_offset_with_seconds_is_rejected(self, offset: timedelta) -> None:
        zone = timezone(offset)
        with pytest.raises(FormatError, match="whole number of minutes"):
            DateTime.from_datetime(datetime(2024, 1, 15, 10, 30, tzinfo=zone))

    def test_naive_input_is_utc(self) -> None:
        assert DateTime.from_datetime(datetime(2024, 1, 15, 10, 30)).text == (
            "2024-01-15T10:30:00Z"
        )

    def test_full_precision_drops_fraction(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, 5, 999_999, tzinfo=UTC)
        assert DateTime.from_datetime(moment).text == "2024-01-15T10:30:05Z"

    def test_partial_constructors_truncate(self) -> None:
        moment = date(2024, 12, 31)
        assert DateTime.from_datetime_day(moment).text == "2024-12-31"
        assert DateTime.from_datetime_month(moment).text == "2024-12"
        assert DateTime.from_datetime_year(moment).text == "2024"

    def test_round_trip_through_text(self) -> None:
        original = DateTime("2024-01-15T10:30:05+06:00")
        assert DateTime(original.serialize()) == original
        assert DateTime.from_datetime(original.to_datetime()) == original
