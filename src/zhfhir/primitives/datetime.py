"""FHIR ``dateTime``: a date at any of its three precisions, or a full
``YYYY-MM-DDThh:mm:ss[.fff][Z|+hh:mm]`` timestamp with an optional offset.

Two values that denote the same instant but are written differently
(``Z`` versus ``+00:00``, ``.5`` versus ``.500``) are different values.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import ClassVar

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.errors import ParseError
from zhfhir.primitives.grammar import (
    DATE_TIME_GRAMMAR,
    Grammar,
    Precision,
    as_utc_if_naive,
    format_clock,
    format_day,
    format_month,
    format_offset,
    format_year,
    fraction_to_micros,
    parse_calendar_date,
    split_fraction,
)

_ZONED_LAYOUT = "%Y-%m-%dT%H:%M:%S%z"
_LOCAL_LAYOUT = "%Y-%m-%dT%H:%M:%S"


def parse_zoned(text: str) -> datetime:
    """Timestamp with an explicit offset and no fraction."""
    return datetime.strptime(text, _ZONED_LAYOUT)


def parse_local(text: str) -> datetime:
    """Timestamp without an offset; read as UTC."""
    return datetime.strptime(text, _LOCAL_LAYOUT).replace(tzinfo=UTC)


def parse_fractional(text: str) -> datetime:
    """Timestamp with fractional seconds, offset optional.

    ``datetime`` holds microseconds, so digits past the sixth are truncated.
    """
    whole, digits = split_fraction(text)
    if digits is None:
        msg = f"no fractional seconds in {text!r}"
        raise ValueError(msg)
    try:
        moment = parse_zoned(whole)
    except ValueError:
        moment = parse_local(whole)
    return moment.replace(microsecond=fraction_to_micros(digits))


def resolve_timestamp(
    text: str, attempts: tuple[Callable[[str], datetime], ...], type_name: str
) -> datetime:
    """Run *attempts* in order and return the first successful parse."""
    failures: list[str] = []
    for attempt in attempts:
        try:
            return attempt(text)
        except ValueError as exc:
            failures.append(str(exc))
    msg = f"invalid {type_name}: {text or '<absent>'} ({'; '.join(failures)})"
    raise ParseError(msg)


class DateTime(TemporalPrimitive):
    """FHIR dateTime primitive with year, month, day or second precision."""

    __slots__ = ()

    type_name: ClassVar[str] = "dateTime"
    grammar: ClassVar[Grammar] = DATE_TIME_GRAMMAR
    expected: ClassVar[str] = (
        "YYYY, YYYY-MM, YYYY-MM-DD, or YYYY-MM-DDThh:mm:ss[.sss][Z|+/-hh:mm]"
    )

    def to_datetime(self) -> datetime:
        """Resolve to a ``datetime``.

        Partial values resolve like :meth:`Date.to_datetime` (naive
        midnight on the first covered day). Full timestamps are aware: the
        written offset is kept, and a timestamp without one is read as UTC.
        """
        precision = self.precision()
        if precision is Precision.SECOND:
            return resolve_timestamp(
                self.text, (parse_zoned, parse_local, parse_fractional), self.type_name
            )
        try:
            return parse_calendar_date(self.text, precision)
        except ValueError as exc:
            msg = f"invalid {self.type_name}: {self.text or '<absent>'} ({exc})"
            raise ParseError(msg) from exc

    @classmethod
    def from_datetime(cls, moment: datetime) -> DateTime:
        """Full precision with the offset of *moment* (naive means UTC).

        Sub-second digits are dropped.
        """
        moment = as_utc_if_naive(moment)
        clock = format_clock(moment.hour, moment.minute, moment.second)
        return cls(f"{format_day(moment)}T{clock}{format_offset(moment)}")

    @classmethod
    def from_datetime_day(cls, moment: date) -> DateTime:
        return cls(format_day(moment))

    @classmethod
    def from_datetime_month(cls, moment: date) -> DateTime:
        return cls(format_month(moment))

    @classmethod
    def from_datetime_year(cls, moment: date) -> DateTime:
        return cls(format_year(moment))
