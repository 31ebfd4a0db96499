"""Extension and PrimitiveExtension — metadata carried beside a value.

In FHIR JSON a primitive field ``name`` may have a sibling ``_name``
holding ``{id?, extension: [...]}``. Each extension is identified by its
``url`` and holds at most one ``value<Kind>`` entry.

The value slot is modelled as a tagged variant (:class:`ExtensionValue`)
rather than thirteen independent optional fields, so "which value is set"
has exactly one answer.

The module-level helpers accept ``None`` for an attachment that does not
exist, so callers can query or extend it without a null check.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator
from pydantic_core import core_schema

from zhfhir.primitives.base import TemporalPrimitive
from zhfhir.primitives.date import Date
from zhfhir.primitives.datetime import DateTime
from zhfhir.primitives.instant import Instant
from zhfhir.primitives.time import Time

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler


class ValueKind(StrEnum):
    """Recognised value types for an extension."""

    DATE = "Date"
    DATE_TIME = "DateTime"
    TIME = "Time"
    INSTANT = "Instant"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    STRING = "String"
    DECIMAL = "Decimal"
    URI = "Uri"
    URL = "Url"
    CANONICAL = "Canonical"
    BASE64_BINARY = "Base64Binary"
    CODE = "Code"

    @property
    def json_key(self) -> str:
        return f"value{self.value}"


_TEMPORAL_KINDS: dict[ValueKind, type[TemporalPrimitive]] = {
    ValueKind.DATE: Date,
    ValueKind.DATE_TIME: DateTime,
    ValueKind.TIME: Time,
    ValueKind.INSTANT: Instant,
}

_TEXT_KINDS = frozenset(
    {
        ValueKind.STRING,
        ValueKind.URI,
        ValueKind.URL,
        ValueKind.CANONICAL,
        ValueKind.BASE64_BINARY,
        ValueKind.CODE,
    }
)

KIND_BY_JSON_KEY: dict[str, ValueKind] = {kind.json_key: kind for kind in ValueKind}


def _coerce(kind: ValueKind, data: object) -> Any:
    """Check *data* against *kind*, building temporal values from text."""
    temporal_cls = _TEMPORAL_KINDS.get(kind)
    if temporal_cls is not None:
        if isinstance(data, temporal_cls):
            data.validate()
            return data
        return temporal_cls(data)  # type: ignore[arg-type]
    if kind is ValueKind.BOOLEAN:
        if isinstance(data, bool):
            return data
    elif kind is ValueKind.INTEGER:
        if isinstance(data, int) and not isinstance(data, bool):
            return data
    elif kind is ValueKind.DECIMAL:
        if isinstance(data, int | float) and not isinstance(data, bool):
            return data
    elif kind in _TEXT_KINDS and isinstance(data, str):
        return data
    msg = f"{kind.json_key} cannot hold {type(data).__name__} value {data!r}"
    raise ValueError(msg)


class ExtensionValue:
    """Exactly one typed value: the populated slot of an extension."""

    __slots__ = ("kind", "data")

    kind: ValueKind
    data: Any

    def __init__(self, kind: ValueKind | str, data: object) -> None:
        resolved = ValueKind(kind)
        object.__setattr__(self, "kind", resolved)
        object.__setattr__(self, "data", _coerce(resolved, data))

    @property
    def json_key(self) -> str:
        return self.kind.json_key

    def to_json(self) -> str | bool | int | float:
        """The JSON token for this value (temporal values as canonical text)."""
        if isinstance(self.data, TemporalPrimitive):
            return self.data.serialize()
        return self.data  # type: ignore[no-any-return]

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(cls)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "ExtensionValue is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtensionValue):
            return NotImplemented
        return (
            self.kind is other.kind
            and type(self.data) is type(other.data)
            and self.data == other.data
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.data))

    def __repr__(self) -> str:
        return f"ExtensionValue({self.kind.value!r}, {self.data!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (ExtensionValue, (self.kind, self.data))


class Extension(BaseModel):
    """A FHIR extension: a url, an optional value and nested extensions.

    Validates from FHIR JSON shape, e.g.
    ``{"url": "http://example.org/ext", "valueString": "test"}``, and
    serializes back to the same shape.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    url: str
    value: ExtensionValue | None = None
    extension: list[Extension] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collect_value_slot(cls, data: Any) -> Any:
        """Fold a ``value<Kind>`` key into the ``value`` field."""
        if not isinstance(data, dict):
            return data
        slots = [key for key in data if key in KIND_BY_JSON_KEY]
        if not slots:
            return data
        if len(slots) > 1 or "value" in data:
            named = ", ".join(sorted(slots + (["value"] if "value" in data else [])))
            msg = f"extension may hold only one value, got: {named}"
            raise ValueError(msg)
        key = slots[0]
        folded = {name: item for name, item in data.items() if name != key}
        folded["value"] = ExtensionValue(KIND_BY_JSON_KEY[key], data[key])
        return folded

    @classmethod
    def of(cls, url: str, kind: ValueKind | str, data: object, **fields: Any) -> Extension:
        """Build a leaf extension holding one value."""
        return cls(url=url, value=ExtensionValue(kind, data), **fields)

    @property
    def value_kind(self) -> ValueKind | None:
        return self.value.kind if self.value is not None else None

    def get_value(self) -> Any:
        """The held value, or None for an extension that only nests others."""
        return self.value.data if self.value is not None else None

    def to_fhir(self) -> dict[str, Any]:
        """FHIR JSON shape: ``id``, ``extension``, ``url``, ``value<Kind>``."""
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        if self.extension:
            data["extension"] = [child.to_fhir() for child in self.extension]
        data["url"] = self.url
        if self.value is not None:
            data[self.value.json_key] = self.value.to_json()
        return data

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return self.to_fhir()


class PrimitiveExtension(BaseModel):
    """The ``_name`` side-car of a primitive field.

    ``extension`` is the one mutable sequence in the model; it is only ever
    appended to. Callers sharing one instance across threads must
    synchronise writes themselves.
    """

    id: str | None = None
    extension: list[Extension] = Field(default_factory=list)

    def has_extension(self) -> bool:
        return len(self.extension) > 0

    def get_extension_by_url(self, url: str) -> Extension | None:
        """First extension whose url equals *url* exactly."""
        for ext in self.extension:
            if ext.url == url:
                return ext
        return None

    def add_extension(self, ext: Extension) -> None:
        self.extension.append(ext)

    def is_empty(self) -> bool:
        """True when there is neither an id nor any extension to emit."""
        return self.id is None and not self.extension

    def to_fhir(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        if self.extension:
            data["extension"] = [ext.to_fhir() for ext in self.extension]
        return data

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return self.to_fhir()


# ---------------------------------------------------------------------------
# Absent-safe helpers
# ---------------------------------------------------------------------------


def has_extension(attachment: PrimitiveExtension | None) -> bool:
    """False for a missing attachment or one without extensions."""
    return attachment is not None and attachment.has_extension()


def get_extension_by_url(attachment: PrimitiveExtension | None, url: str) -> Extension | None:
    if attachment is None:
        return None
    return attachment.get_extension_by_url(url)


def add_extension(attachment: PrimitiveExtension | None, ext: Extension) -> None:
    """Append *ext*; does nothing when the attachment is missing."""
    if attachment is None:
        return
    attachment.add_extension(ext)
