"""Command group: validate, inspect and stamp FHIR temporal values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zhfhir.commands._base import FhirGroup
from zhfhir.services.primitives import PrimitiveService

if TYPE_CHECKING:
    from zhfhir.commands._context import AppContext

_PRIMITIVE_EXAMPLES = """\
  zhfhir primitive inspect date 2024-05
  zhfhir primitive inspect dateTime 2024-05-01T10:30:00+06:00
  zhfhir primitive inspect instant 2024-05-01T04:30:00.123Z
  zhfhir primitive now instant --nano
  zhfhir --json primitive now date --precision month"""


@click.group(cls=FhirGroup, examples=_PRIMITIVE_EXAMPLES)
@click.pass_obj
def primitive(app: AppContext) -> None:
    """Validate and construct date, time, dateTime and instant values."""


@primitive.command(
    examples="""\
  zhfhir primitive inspect date 2024
  zhfhir primitive inspect time 10:30:00.5
  zhfhir --json primitive inspect dateTime 2024-05-01T10:30:00Z"""
)
@click.argument("type_name", metavar="TYPE")
@click.argument("value")
@click.pass_obj
def inspect(app: AppContext, type_name: str, value: str) -> None:
    """Validate VALUE as TYPE and show its precision and resolved time."""
    app.emit(PrimitiveService().inspect(type_name, value))


@primitive.command(
    examples="""\
  zhfhir primitive now dateTime
  zhfhir primitive now date --precision year
  zhfhir primitive now time --nano
  zhfhir --json primitive now instant --nano"""
)
@click.argument("type_name", metavar="TYPE")
@click.option(
    "--precision",
    type=click.Choice(["year", "month", "day", "second"]),
    default=None,
    help="Precision of the stamped value (default depends on TYPE).",
)
@click.option("--nano", is_flag=True, help="Keep sub-second digits (time and instant).")
@click.pass_obj
def now(app: AppContext, type_name: str, precision: str | None, nano: bool) -> None:
    """Stamp the current UTC time as TYPE."""
    app.emit(PrimitiveService().now(type_name, precision=precision, nano=nano))
