"""Code enums shared by terminology records."""

from __future__ import annotations

from enum import StrEnum


class PublicationStatus(StrEnum):
    """Lifecycle status of a conformance resource."""

    DRAFT = "draft"
    ACTIVE = "active"
    RETIRED = "retired"
    UNKNOWN = "unknown"


class CodeSystemContentMode(StrEnum):
    """How much of the code system's content a resource carries."""

    NOT_PRESENT = "not-present"
    EXAMPLE = "example"
    FRAGMENT = "fragment"
    COMPLETE = "complete"
    SUPPLEMENT = "supplement"
