"""FHIR ``date``: YYYY, YYYY-MM or YYYY-MM-DD.

A partial date keeps its precision. ``"1974-12"`` records that the day is
unknown; it is never widened to ``"1974-12-01"``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.errors import ParseError
from zhfhir.primitives.grammar import (
    DATE_GRAMMAR,
    Grammar,
    format_day,
    format_month,
    format_year,
    parse_calendar_date,
)


class Date(TemporalPrimitive):
    """FHIR date primitive with year, month or day precision."""

    __slots__ = ()

    type_name: ClassVar[str] = "date"
    grammar: ClassVar[Grammar] = DATE_GRAMMAR
    expected: ClassVar[str] = "YYYY, YYYY-MM, or YYYY-MM-DD"

    def to_datetime(self) -> datetime:
        """Resolve to naive midnight on the first day the value covers.

        Year precision resolves to January 1st, month precision to the 1st
        of the month. No timezone is attached.
        """
        precision = self.precision()
        try:
            return parse_calendar_date(self.text, precision)
        except ValueError as exc:
            msg = f"invalid date: {self.text or '<absent>'} ({exc})"
            raise ParseError(msg) from exc

    def to_date(self) -> date:
        return self.to_datetime().date()

    @classmethod
    def from_datetime(cls, moment: date) -> Date:
        """Day precision (YYYY-MM-DD)."""
        return cls(format_day(moment))

    @classmethod
    def from_datetime_month(cls, moment: date) -> Date:
        """Month precision (YYYY-MM); the day is dropped, never rounded."""
        return cls(format_month(moment))

    @classmethod
    def from_datetime_year(cls, moment: date) -> Date:
        """Year precision (YYYY)."""
        return cls(format_year(moment))

