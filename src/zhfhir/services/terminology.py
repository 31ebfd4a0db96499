"""TerminologyService — ValueSet ``$expand`` over loaded definitions.

Lookup order: value set by url, then code system by url. A code system
expands to a value set listing every concept, stamped with the time of
expansion. An optional filter keeps entries whose code or display contains
the filter text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from zhfhir.domain.terminology import (
    CodeSystem,
    ValueSet,
    ValueSetExpansion,
    ValueSetExpansionContains,
)
from zhfhir.primitives.datetime import DateTime
from zhfhir.services import _helpers
from zhfhir.services.result import ServiceResult

if TYPE_CHECKING:
    from zhfhir.infrastructure.ig import IgLoader

logger = logging.getLogger(__name__)


def expand_code_system(code_system: CodeSystem) -> ValueSet:
    """Build a value set whose expansion lists every concept of *code_system*."""
    contains = [
        ValueSetExpansionContains(
            system=code_system.url, code=concept.code, display=concept.display
        )
        for concept in code_system.concept
    ]
    return ValueSet(
        url=code_system.url,
        status=code_system.status,
        title=code_system.title,
        expansion=ValueSetExpansion(
            timestamp=DateTime.from_datetime(_helpers.utc_now()),
            total=len(contains),
            contains=contains,
        ),
    )


def filter_value_set(
    value_set: ValueSet, needle: str, *, case_sensitive: bool = False
) -> ValueSet:
    """Copy of *value_set* keeping only expansion entries that match *needle*.

    A value set without an expansion is returned unchanged.
    """
    if value_set.expansion is None:
        return value_set
    kept = [
        entry
        for entry in value_set.expansion.contains
        if entry.matches(needle, case_sensitive=case_sensitive)
    ]
    expansion = value_set.expansion.model_copy(update={"contains": kept, "total": len(kept)})
    return value_set.model_copy(update={"expansion": expansion})


class TerminologyService:
    """Expansion and filtering over an :class:`IgLoader`'s records."""

    def __init__(self, loader: IgLoader, *, case_sensitive_filter: bool = False) -> None:
        self._loader = loader
        self._case_sensitive = case_sensitive_filter

    def expand(self, url: str, *, filter_text: str | None = None) -> ServiceResult:
        """Expand the value set or code system registered under *url*."""
        op = "expand"
        value_set = self._loader.value_sets.get(url)
        if value_set is None:
            code_system = self._loader.code_systems.get(url)
            if code_system is None:
                return ServiceResult.failure(
                    op, "NOT_FOUND", f"Terminology resource not found: {url}", url=url
                )
            value_set = expand_code_system(code_system)
            logger.debug("Expanded code system %s (%d concepts)", url, len(code_system.concept))

        if filter_text:
            value_set = filter_value_set(
                value_set, filter_text, case_sensitive=self._case_sensitive
            )

        count = len(value_set.expansion.contains) if value_set.expansion else 0
        return ServiceResult(
            ok=True,
            op=op,
            data={"url": url, "count": count, "value_set": value_set.to_fhir()},
        )

    def summary(self) -> ServiceResult:
        """Counts and urls of the loaded records."""
        return ServiceResult(
            ok=True,
            op="load",
            data={
                "code_systems": len(self._loader.code_systems),
                "value_sets": len(self._loader.value_sets),
                "urls": sorted([*self._loader.code_systems, *self._loader.value_sets]),
            },
        )
