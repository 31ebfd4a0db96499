"""FHIR ``instant``: ``YYYY-MM-DDThh:mm:ss[.fff](Z|+hh:mm)``.

Always a full timestamp and always zoned. This is the one shape difference
from the full form of ``dateTime``, where the offset may be left out.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import ClassVar

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.datetime import parse_fractional, parse_zoned, resolve_timestamp
from zhfhir.primitives.grammar import (
    INSTANT_GRAMMAR,
    NANOS_PER_MICRO,
    NANOS_PER_SECOND,
    Grammar,
    as_utc_if_naive,
    format_clock,
    format_day,
    trimmed_fraction,
)


class Instant(TemporalPrimitive):
    """FHIR instant primitive."""

    __slots__ = ()

    type_name: ClassVar[str] = "instant"
    grammar: ClassVar[Grammar] = INSTANT_GRAMMAR
    expected: ClassVar[str] = "YYYY-MM-DDThh:mm:ss[.sss](Z|+/-hh:mm)"

    def to_datetime(self) -> datetime:
        """Resolve to an aware ``datetime`` carrying the written offset."""
        return resolve_timestamp(self.text, (parse_zoned, parse_fractional), self.type_name)

    @classmethod
    def from_datetime(cls, moment: datetime) -> Instant:
        """UTC, whole seconds (naive input is taken as UTC)."""
        return cls._build(moment, 0)

    @classmethod
    def from_datetime_nano(cls, moment: datetime, nanosecond: int | None = None) -> Instant:
        """UTC with the shortest lossless fraction.

        The sub-second part comes from *moment* unless *nanosecond* is given.
        Trailing zero digits are stripped, and a whole second emits no
        fraction.
        """
        nanos = moment.microsecond * NANOS_PER_MICRO if nanosecond is None else nanosecond
        return cls._build(moment, nanos)

    @classmethod
    def from_epoch_ns(cls, epoch_ns: int) -> Instant:
        """Build from nanoseconds since the Unix epoch (``time.time_ns()``)."""
        seconds, nanos = divmod(epoch_ns, NANOS_PER_SECOND)
        return cls._build(datetime.fromtimestamp(seconds, UTC), nanos)

    @classmethod
    def _build(cls, moment: datetime, nanos: int) -> Instant:
        moment = as_utc_if_naive(moment).astimezone(UTC)
        clock = format_clock(moment.hour, moment.minute, moment.second)
        return cls(f"{format_day(moment)}T{clock}{trimmed_fraction(nanos)}Z")
