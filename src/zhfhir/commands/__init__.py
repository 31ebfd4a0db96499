"""Subcommand modules for zhfhir.

Provides register_commands() which uses deferred imports to keep
``zhfhir --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from zhfhir.commands.ig import ig
    from zhfhir.commands.primitive import primitive
    from zhfhir.commands.terminology import terminology

    cli.add_command(primitive)
    cli.add_command(ig)
    cli.add_command(terminology)
