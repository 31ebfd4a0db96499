"""Terminology records: CodeSystem, ValueSet and ValueSet expansions.

Only the elements the definition-file loader and the expansion operation
use are modelled. ``date`` and ``expansion.timestamp`` are ``DateTime``
primitives and each carries its ``_`` side-car.
"""

from __future__ import annotations

from pydantic import Field

from zhfhir.domain.base import FhirModel
from zhfhir.domain.types import CodeSystemContentMode, PublicationStatus
from zhfhir.primitives.datetime import DateTime
from zhfhir.primitives.extension import PrimitiveExtension


class CodeSystemConcept(FhirModel):
    """One code defined by a code system."""

    code: str
    display: str | None = None


class CodeSystem(FhirModel):
    resource_type: str = Field(default="CodeSystem", alias="resourceType")
    id: str | None = None
    url: str | None = None
    name: str | None = None
    title: str | None = None
    description: str | None = None
    status: PublicationStatus = PublicationStatus.ACTIVE
    content: CodeSystemContentMode = CodeSystemContentMode.COMPLETE
    date: DateTime | None = None
    date_ext: PrimitiveExtension | None = Field(default=None, alias="_date")
    concept: list[CodeSystemConcept] = Field(default_factory=list)


class ValueSetExpansionContains(FhirModel):
    """One code in an expansion."""

    system: str | None = None
    code: str | None = None
    display: str | None = None

    def matches(self, needle: str, *, case_sensitive: bool = False) -> bool:
        """True when *needle* occurs in the code or the display."""
        haystacks = [text for text in (self.code, self.display) if text is not None]
        if not case_sensitive:
            needle = needle.lower()
            haystacks = [text.lower() for text in haystacks]
        return any(needle in text for text in haystacks)


class ValueSetExpansion(FhirModel):
    timestamp: DateTime
    timestamp_ext: PrimitiveExtension | None = Field(default=None, alias="_timestamp")
    total: int | None = None
    contains: list[ValueSetExpansionContains] = Field(default_factory=list)


class ValueSet(FhirModel):
    resource_type: str = Field(default="ValueSet", alias="resourceType")
    id: str | None = None
    url: str | None = None
    name: str | None = None
    title: str | None = None
    description: str | None = None
    status: PublicationStatus = PublicationStatus.ACTIVE
    date: DateTime | None = None
    date_ext: PrimitiveExtension | None = Field(default=None, alias="_date")
    expansion: ValueSetExpansion | None = None
