"""Fixed-shape grammars and shared formatting helpers.

Each temporal type owns an ordered tuple of ``(pattern, precision)`` pairs.
Patterns are matched with ``fullmatch`` and ASCII-only digits, so a
trailing newline or a non-ASCII digit never slips through. Validation never
consults the calendar; resolution to ``datetime`` happens only afterwards.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta
from enum import StrEnum

from zhfhir.primitives.errors import FormatError

NANOS_PER_MICRO = 1_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR


class Precision(StrEnum):
    """Granularity at which a temporal value is specified."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    SECOND = "second"
    UNKNOWN = "unknown"


YEAR_PATTERN = re.compile(r"\d{4}", re.ASCII)
YEAR_MONTH_PATTERN = re.compile(r"\d{4}-\d{2}", re.ASCII)
FULL_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

# Groups: year, month, day, hour, minute, second, fraction, zone
DATE_TIME_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})?",
    re.ASCII,
)
INSTANT_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)

# Groups: hour, minute, second, fraction
TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d):([0-5]\d)(?:\.(\d+))?", re.ASCII)

_FRACTION_PATTERN = re.compile(r"\.(\d+)", re.ASCII)

Grammar = tuple[tuple[re.Pattern[str], Precision], ...]

DATE_GRAMMAR: Grammar = (
    (YEAR_PATTERN, Precision.YEAR),
    (YEAR_MONTH_PATTERN, Precision.MONTH),
    (FULL_DATE_PATTERN, Precision.DAY),
)
DATE_TIME_GRAMMAR: Grammar = (*DATE_GRAMMAR, (DATE_TIME_PATTERN, Precision.SECOND))
INSTANT_GRAMMAR: Grammar = ((INSTANT_PATTERN, Precision.SECOND),)
TIME_GRAMMAR: Grammar = ((TIME_PATTERN, Precision.SECOND),)


def match_precision(text: str, grammar: Grammar) -> Precision:
    """Return the precision of the first pattern in *grammar* matching *text*."""
    for pattern, precision in grammar:
        if pattern.fullmatch(text) is not None:
            return precision
    return Precision.UNKNOWN


# ---------------------------------------------------------------------------
# Resolution helpers
# ---------------------------------------------------------------------------


def parse_calendar_date(text: str, precision: Precision) -> datetime:
    """Resolve a year, year-month or full date to naive midnight.

    Raises ``ValueError`` when the fields do not name a real calendar day.
    """
    if precision is Precision.DAY:
        return datetime.strptime(text, "%Y-%m-%d")
    if precision is Precision.MONTH:
        return datetime.strptime(text, "%Y-%m")
    if precision is Precision.YEAR:
        return datetime.strptime(text, "%Y")
    msg = f"no calendar layout for precision {precision!s}"
    raise ValueError(msg)


def split_fraction(text: str) -> tuple[str, str | None]:
    """Split ``...ss.fff<zone>`` into ``(text without fraction, digits)``."""
    match = _FRACTION_PATTERN.search(text)
    if match is None:
        return text, None
    return text[: match.start()] + text[match.end() :], match.group(1)


def fraction_to_nanos(digits: str | None) -> int:
    """Convert fractional-second digits to nanoseconds, truncating past nine."""
    if not digits:
        return 0
    return int(digits[:9].ljust(9, "0"))


def fraction_to_micros(digits: str | None) -> int:
    """Convert fractional-second digits to microseconds, truncating past six."""
    if not digits:
        return 0
    return int(digits[:6].ljust(6, "0"))


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def as_utc_if_naive(moment: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values pass through."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=UTC)
    return moment


def format_offset(moment: datetime) -> str:
    """Render the UTC offset of *moment* as ``Z`` or ``+hh:mm``.

    Offsets that are not a whole number of minutes (historical LMT zones)
    cannot be written and raise ``FormatError``.
    """
    offset = moment.utcoffset()
    if offset is None or offset == timedelta(0):
        return "Z"
    if offset % timedelta(minutes=1):
        msg = f"UTC offset {offset} is not a whole number of minutes"
        raise FormatError(msg)
    sign = "-" if offset < timedelta(0) else "+"
    hours, minutes = divmod(abs(offset) // timedelta(minutes=1), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_year(day: date) -> str:
    return f"{day.year:04d}"


def format_month(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def format_day(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def format_clock(hour: int, minute: int, second: int) -> str:
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def trimmed_fraction(nanos: int) -> str:
    """Shortest lossless ``.fff`` suffix for *nanos*; empty when zero."""
    if not 0 <= nanos < NANOS_PER_SECOND:
        msg = f"sub-second part out of range: {nanos} ns"
        raise FormatError(msg)
    if nanos == 0:
        return ""
    return "." + f"{nanos:09d}".rstrip("0")
