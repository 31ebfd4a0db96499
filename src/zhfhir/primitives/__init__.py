"""Primitive layer — FHIR temporal value types and the extension model.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

from zhfhir.primitives.date import Date
from zhfhir.primitives.datetime import DateTime
from zhfhir.primitives.errors import (
    FormatError,
    MalformedLiteralError,
    ParseError,
    PrimitiveError,
)
from zhfhir.primitives.extension import (
    Extension,
    ExtensionValue,
    PrimitiveExtension,
    ValueKind,
    add_extension,
    get_extension_by_url,
    has_extension,
)
from zhfhir.primitives.grammar import Precision
from zhfhir.primitives.instant import Instant
from zhfhir.primitives.time import Time

__all__ = [
    "Date",
    "DateTime",
    "Extension",
    "ExtensionValue",
    "FormatError",
    "Instant",
    "MalformedLiteralError",
    "ParseError",
    "Precision",
    "PrimitiveError",
    "PrimitiveExtension",
    "Time",
    "ValueKind",
    "add_extension",
    "get_extension_by_url",
    "has_extension",
]
