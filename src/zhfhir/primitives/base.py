"""TemporalPrimitive — shared value-object behaviour for the temporal types.

INVARIANT: the canonical text is the only state. Precision is recomputed
from it on demand, equality compares it byte for byte, and a constructed
instance always satisfies its grammar. The one exception is the absent
instance produced by calling the class with no argument.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic_core import core_schema

from zhfhir.primitives.errors import FormatError, MalformedLiteralError
from zhfhir.primitives.grammar import Grammar, Precision, match_precision

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler


class TemporalPrimitive:
    """Immutable wrapper around a grammar-checked string.

    Subclasses set ``type_name`` (used in messages and JSON keys),
    ``grammar`` and ``expected`` (the human list of accepted shapes).
    """

    __slots__ = ("_text",)

    type_name: ClassVar[str]
    grammar: ClassVar[Grammar]
    expected: ClassVar[str]

    def __init__(self, text: str | None = None) -> None:
        if text is not None:
            self.check(text)
        object.__setattr__(self, "_text", text or "")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @classmethod
    def check(cls, text: object) -> None:
        """Raise ``FormatError`` unless *text* matches one of the grammar shapes."""
        if not isinstance(text, str):
            msg = f"{cls.type_name} must be a string, got {type(text).__name__}"
            raise FormatError(msg)
        if text == "":
            msg = f"{cls.type_name} cannot be empty"
            raise FormatError(msg)
        if match_precision(text, cls.grammar) is Precision.UNKNOWN:
            msg = f"invalid FHIR {cls.type_name} format: {text} (expected {cls.expected})"
            raise FormatError(msg)

    @classmethod
    def must(cls, text: str) -> Self:
        """Construct from a literal known to be valid.

        A bad literal is a programming error: it raises
        ``MalformedLiteralError`` instead of the recoverable ``FormatError``.
        """
        try:
            return cls(text)
        except FormatError as exc:
            raise MalformedLiteralError(str(exc)) from exc

    def validate(self) -> None:
        """Re-check the held text against the grammar."""
        self.check(self._text)

    @classmethod
    def _require_present(cls, value: Self) -> Self:
        """Model fields never hold the absent instance; use ``None`` instead."""
        value.validate()
        return value

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_absent(self) -> bool:
        """True for the default-constructed instance with no text."""
        return self._text == ""

    def precision(self) -> Precision:
        return match_precision(self._text, self.grammar)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        """Return the canonical text after re-validating it."""
        self.validate()
        return self._text

    def to_json(self) -> str:
        return json.dumps(self.serialize())

    @classmethod
    def from_json(cls, raw: str | bytes) -> Self:
        """Decode a JSON document holding a single string token."""
        token = json.loads(raw)
        if not isinstance(token, str):
            msg = f"{cls.type_name} must be a JSON string, got {type(token).__name__}"
            raise FormatError(msg)
        return cls(token)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_text = core_schema.chain_schema(
            [
                core_schema.str_schema(strict=True),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )
        present_instance = core_schema.chain_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_plain_validator_function(cls._require_present),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_text,
            python_schema=core_schema.union_schema([present_instance, from_text]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.serialize(), return_schema=core_schema.str_schema()
            ),
        )

    # ------------------------------------------------------------------
    # Value-object protocol
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, TemporalPrimitive)
        return self._text == other._text

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._text))

    def __bool__(self) -> bool:
        return not self.is_absent

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        if self.is_absent:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self._text!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._text or None,))
