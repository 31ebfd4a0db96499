"""FhirModel — base for records that carry primitive fields.

A primitive field ``name`` is declared with its JSON alias, and its
side-car with the alias ``"_" + name``::

    class Patient(FhirModel):
        birth_date: Date | None = Field(default=None, alias="birthDate")
        birth_date_ext: PrimitiveExtension | None = Field(default=None, alias="_birthDate")

Serialization follows FHIR JSON rules: ``None`` values and empty lists are
left out, and a side-car with neither an id nor extensions is omitted
rather than written as ``{}``.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer

from zhfhir.primitives.extension import PrimitiveExtension


class FhirModel(BaseModel):
    """Frozen record with FHIR JSON (de)serialization."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _prune(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if isinstance(value, PrimitiveExtension) and value.is_empty():
                data.pop(field.alias or name, None)
                data.pop(name, None)
        return {key: item for key, item in data.items() if item is not None and item != []}

    def to_fhir(self) -> dict[str, Any]:
        """JSON-ready dict in FHIR shape."""
        return self.model_dump(mode="json", by_alias=True)

    def to_fhir_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_fhir(cls, data: dict[str, Any]) -> Self:
        return cls.model_validate(data)

    @classmethod
    def from_fhir_json(cls, raw: str | bytes) -> Self:
        return cls.model_validate_json(raw)
