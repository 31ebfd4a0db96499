"""Command group: implementation guide loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zhfhir.commands._base import FhirGroup
from zhfhir.services.terminology import TerminologyService

if TYPE_CHECKING:
    from zhfhir.commands._context import AppContext

_IG_EXAMPLES = """\
  zhfhir ig load
  zhfhir ig load --ig ../BD-Core-FHIR-IG
  zhfhir --json ig load"""


@click.group(cls=FhirGroup, examples=_IG_EXAMPLES)
@click.pass_obj
def ig(app: AppContext) -> None:
    """Read terminology definitions from an implementation guide."""


@ig.command(
    examples="""\
  zhfhir ig load
  zhfhir ig load --ig /srv/BD-Core-FHIR-IG
  zhfhir -c ./zhfhir.toml --json ig load"""
)
@click.option(
    "--ig", "ig_path", default=None, help="Implementation guide root (overrides config)."
)
@click.pass_obj
def load(app: AppContext, ig_path: str | None) -> None:
    """Load CodeSystem and ValueSet definitions and list their urls."""
    app.emit(TerminologyService(app.loader(ig_path)).summary())
