"""FHIR ``time``: hh:mm:ss with optional fractional seconds.

Time of day only. No date, no timezone, no leap second (``ss`` stops at 59)
and no ``24:00:00``. The fractional part may carry any number of digits.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from typing import ClassVar

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.errors import ParseError
from zhfhir.primitives.grammar import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICRO,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    TIME_GRAMMAR,
    TIME_PATTERN,
    Grammar,
    format_clock,
    fraction_to_nanos,
    trimmed_fraction,
)


class Time(TemporalPrimitive):
    """FHIR time primitive."""

    __slots__ = ()

    type_name: ClassVar[str] = "time"
    grammar: ClassVar[Grammar] = TIME_GRAMMAR
    expected: ClassVar[str] = "hh:mm:ss or hh:mm:ss.ffffff"

    def _components(self) -> tuple[int, int, int, int]:
        match = TIME_PATTERN.fullmatch(self.text)
        if match is None:
            msg = f"invalid time: {self.text or '<absent>'}"
            raise ParseError(msg)
        hour, minute, second, fraction = match.groups()
        return int(hour), int(minute), int(second), fraction_to_nanos(fraction)

    def total_nanoseconds(self) -> int:
        """Nanoseconds since midnight. Digits past the ninth are dropped."""
        hour, minute, second, nanos = self._components()
        return (
            hour * NANOS_PER_HOUR
            + minute * NANOS_PER_MINUTE
            + second * NANOS_PER_SECOND
            + nanos
        )

    def to_timedelta(self) -> timedelta:
        """Duration since midnight, at the microsecond resolution of ``timedelta``."""
        return timedelta(microseconds=self.total_nanoseconds() // NANOS_PER_MICRO)

    def resolve_on_date(self, day: date) -> datetime:
        """Place this time of day on *day*.

        Midnight is taken in the timezone carried by *day* when it is an
        aware ``datetime``; otherwise the result is naive. The duration is
        elapsed time, so on a DST transition day the wall clock of the result
        differs from the text.
        """
        tzinfo = day.tzinfo if isinstance(day, datetime) else None
        midnight = datetime(day.year, day.month, day.day, tzinfo=tzinfo)
        if tzinfo is None:
            return midnight + self.to_timedelta()
        return (midnight.astimezone(UTC) + self.to_timedelta()).astimezone(tzinfo)

    @classmethod
    def from_duration(cls, duration: timedelta | int) -> Time:
        """Build from a duration since midnight (``timedelta`` or nanoseconds).

        Durations of a day or more wrap modulo 24 hours, and negative ones
        count back from midnight (``-1s`` is ``23:59:59``). A zero sub-second
        part emits no fraction; otherwise all nine digits are written.
        """
        if isinstance(duration, timedelta):
            total = (
                (duration.days * 86_400 + duration.seconds) * NANOS_PER_SECOND
                + duration.microseconds * NANOS_PER_MICRO
            )
        else:
            total = duration
        total %= NANOS_PER_DAY

        hours, rest = divmod(total, NANOS_PER_HOUR)
        minutes, rest = divmod(rest, NANOS_PER_MINUTE)
        seconds, nanos = divmod(rest, NANOS_PER_SECOND)
        text = format_clock(hours, minutes, seconds)
        if nanos:
            text += f".{nanos:09d}"
        return cls(text)

    @classmethod
    def from_datetime(cls, moment: datetime | time, *, nanosecond: int | None = None) -> Time:
        """Take the time-of-day portion of *moment*.

        Trailing zeros of the fraction are stripped; a whole second emits no
        fraction at all. *nanosecond* overrides the sub-second part when the
        caller holds more precision than ``datetime`` can.
        """
        nanos = moment.microsecond * NANOS_PER_MICRO if nanosecond is None else nanosecond
        text = format_clock(moment.hour, moment.minute, moment.second)
        return cls(text + trimmed_fraction(nanos))
