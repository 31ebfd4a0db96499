"""Command group: terminology operations over the loaded guide."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zhfhir.commands._base import FhirGroup
from zhfhir.services.terminology import TerminologyService

if TYPE_CHECKING:
    from zhfhir.commands._context import AppContext

_TERMINOLOGY_EXAMPLES = """\
  zhfhir terminology expand https://health.zarishsphere.com/fhir/CodeSystem/bd-divisions
  zhfhir terminology expand <url> --filter dhaka
  zhfhir --json terminology expand <url> --ig ../BD-Core-FHIR-IG"""


@click.group(cls=FhirGroup, examples=_TERMINOLOGY_EXAMPLES)
@click.pass_obj
def terminology(app: AppContext) -> None:
    """Expand value sets and code systems."""


@terminology.command(
    examples="""\
  zhfhir terminology expand https://health.zarishsphere.com/fhir/ValueSet/bd-divisions
  zhfhir terminology expand <url> --filter chatto
  zhfhir --json terminology expand <url>"""
)
@click.argument("url")
@click.option(
    "--filter", "filter_text", default=None, help="Keep codes or displays containing TEXT."
)
@click.option(
    "--ig", "ig_path", default=None, help="Implementation guide root (overrides config)."
)
@click.pass_obj
def expand(app: AppContext, url: str, filter_text: str | None, ig_path: str | None) -> None:
    """Expand the value set (or code system) registered under URL."""
    service = TerminologyService(
        app.loader(ig_path),
        case_sensitive_filter=app.settings.terminology.case_sensitive_filter,
    )
    app.emit(service.expand(url, filter_text=filter_text))
