"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Loads the implementation guide lazily and centralises
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from zhfhir.config.logging import configure_logging
from zhfhir.infrastructure.ig import IgLoadError, IgLoader
from zhfhir.output.formatters import format_result

if TYPE_CHECKING:
    from zhfhir.config.settings import ZhfhirSettings
    from zhfhir.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The loader is built on first use so ``--help`` and primitive commands
    never touch the filesystem.
    """

    def __init__(self, settings: ZhfhirSettings) -> None:
        self.settings = settings
        self._loaders: dict[str, IgLoader] = {}
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def loader(self, ig_path: str | None = None) -> IgLoader:
        """IgLoader for *ig_path* (default: the configured guide)."""
        path = self.settings.resolve_ig_path(ig_path)
        key = str(path)
        if key not in self._loaders:
            loader = IgLoader()
            logger.info("Loading IG data from %s", path)
            try:
                loader.load_from_ig(path, fsh_dir=self.settings.ig.fsh_dir)
            except IgLoadError as exc:
                raise click.ClickException(str(exc)) from exc
            logger.info(
                "Loaded %d CodeSystems and %d ValueSets",
                len(loader.code_systems),
                len(loader.value_sets),
            )
            self._loaders[key] = loader
        return self._loaders[key]

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr so piped output stays clean.
        * Failure: stderr, exit code 1.
        """
        output = format_result(
            result, json_output=self.settings.json_output, quiet=self.settings.quiet
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
