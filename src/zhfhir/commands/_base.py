"""Click base classes shared by every zhfhir command.

Both classes take an ``examples`` text, shown by an eager ``--examples``
flag so ``--help`` stays short, and bind the running command path into the
structlog context so every log line names the command that produced it.
"""

from __future__ import annotations

from typing import Any

import click
import structlog


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


class _FhirCommandMixin:
    """Examples flag and command-scoped log context for Click commands."""

    examples: str | None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = super().get_params(ctx)  # type: ignore[misc]
        if self.examples:
            params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples.",
                )
            )
        return params

    def invoke(self, ctx: click.Context) -> Any:
        with structlog.contextvars.bound_contextvars(command=ctx.command_path):
            return super().invoke(ctx)  # type: ignore[misc]


class FhirCommand(_FhirCommandMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples


class FhirGroup(_FhirCommandMixin, click.Group):
    """Group whose subcommands default to :class:`FhirCommand`."""

    command_class = FhirCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
