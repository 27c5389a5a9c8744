"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jrectl.config.logging import configure_logging
from jrectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from jrectl.config.settings import JreSettings
    from jrectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: JreSettings) -> None:
        self.settings = settings

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from jrectl.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with correct exit semantics.

        * Success: result on stdout, warnings on stderr (human modes only;
          JSON output already carries them).
        * Failure: result on stderr, exit code 1.
        """
        out = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        text = format_result(result, settings=out)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not out.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
