"""Error kinds raised by the primitive value types.

``FormatError`` and ``ParseError`` are ordinary, recoverable failures and
subclass :class:`ValueError` so pydantic reports them as validation errors.
``MalformedLiteralError`` signals a programmer error on the forced
construction path and is intentionally not a ``ValueError``.
"""

from __future__ import annotations


class PrimitiveError(Exception):
    """Base class for primitive value failures."""


class FormatError(PrimitiveError, ValueError):
    """Text does not match the grammar of the target type."""


class ParseError(PrimitiveError, ValueError):
    """Grammar-valid text could not be resolved to a calendar value."""


class MalformedLiteralError(PrimitiveError, RuntimeError):
    """A literal passed to ``must()`` failed validation."""
