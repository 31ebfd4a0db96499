"""PrimitiveService — inspect and stamp FHIR temporal values."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.date import Date
from zhfhir.primitives.datetime import DateTime
from zhfhir.primitives.errors import FormatError, ParseError
from zhfhir.primitives.grammar import Precision
from zhfhir.primitives.instant import Instant
from zhfhir.primitives.time import Time
from zhfhir.services import _helpers
from zhfhir.services.result import ServiceResult

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES: dict[str, type[TemporalPrimitive]] = {
    cls.type_name: cls for cls in (Date, Time, DateTime, Instant)
}

_STAMPERS: dict[str, dict[Precision, Callable[[datetime], TemporalPrimitive]]] = {
    "date": {
        Precision.YEAR: Date.from_datetime_year,
        Precision.MONTH: Date.from_datetime_month,
        Precision.DAY: Date.from_datetime,
    },
    "dateTime": {
        Precision.YEAR: DateTime.from_datetime_year,
        Precision.MONTH: DateTime.from_datetime_month,
        Precision.DAY: DateTime.from_datetime_day,
        Precision.SECOND: DateTime.from_datetime,
    },
    "time": {Precision.SECOND: Time.from_datetime},
    "instant": {Precision.SECOND: Instant.from_datetime},
}

_DEFAULT_PRECISION: dict[str, Precision] = {
    "date": Precision.DAY,
    "dateTime": Precision.SECOND,
    "time": Precision.SECOND,
    "instant": Precision.SECOND,
}


def lookup_type(name: str) -> type[TemporalPrimitive] | None:
    """Find a primitive class by FHIR type name, ignoring case."""
    for type_name, cls in PRIMITIVE_TYPES.items():
        if type_name.lower() == name.lower():
            return cls
    return None


def _describe(value: TemporalPrimitive) -> dict[str, Any]:
    data: dict[str, Any] = {
        "type": value.type_name,
        "value": value.text,
        "precision": str(value.precision()),
    }
    if isinstance(value, Time):
        data["resolved"] = str(value.to_timedelta())
        data["nanoseconds"] = value.total_nanoseconds()
    else:
        data["resolved"] = value.to_datetime().isoformat()  # type: ignore[attr-defined]
    return data


class PrimitiveService:
    """Validation and construction of temporal values for the CLI."""

    def inspect(self, type_name: str, text: str) -> ServiceResult:
        """Validate *text* as *type_name* and report its precision and resolution."""
        op = "inspect"
        cls = lookup_type(type_name)
        if cls is None:
            return ServiceResult.failure(
                op,
                "UNKNOWN_TYPE",
                f"Unknown primitive type: {type_name!r}",
                known=sorted(PRIMITIVE_TYPES),
            )
        try:
            value = cls(text)
        except FormatError as exc:
            return ServiceResult.failure(op, "INVALID_FORMAT", str(exc), type=cls.type_name)
        try:
            data = _describe(value)
        except ParseError as exc:
            return ServiceResult.failure(op, "UNRESOLVABLE", str(exc), type=cls.type_name)
        logger.debug("Inspected %s %s", cls.type_name, value.text)
        return ServiceResult(ok=True, op=op, data=data)

    def now(
        self, type_name: str, *, precision: str | None = None, nano: bool = False
    ) -> ServiceResult:
        """Stamp the current time as *type_name* at *precision*.

        With *nano*, ``time`` keeps its sub-second digits and ``instant``
        is built from epoch nanoseconds.
        """
        op = "now"
        cls = lookup_type(type_name)
        if cls is None:
            return ServiceResult.failure(
                op,
                "UNKNOWN_TYPE",
                f"Unknown primitive type: {type_name!r}",
                known=sorted(PRIMITIVE_TYPES),
            )
        name = cls.type_name
        stampers = _STAMPERS[name]
        try:
            wanted = Precision(precision) if precision else _DEFAULT_PRECISION[name]
        except ValueError:
            wanted = Precision.UNKNOWN
        stamp = stampers.get(wanted)
        if stamp is None:
            return ServiceResult.failure(
                op,
                "INVALID_PRECISION",
                f"{name} does not support precision {precision!r}",
                supported=[str(p) for p in stampers],
            )

        moment = _helpers.utc_now()
        if name == "instant" and nano:
            value: TemporalPrimitive = Instant.from_epoch_ns(_helpers.epoch_ns())
        else:
            if name == "time" and not nano:
                moment = moment.replace(microsecond=0)
            value = stamp(moment)
        return ServiceResult(ok=True, op=op, data=_describe(value))
