"""Command: build a minimized runtime image into a distribution folder."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from jrectl.commands._base import JreCommand

if TYPE_CHECKING:
    from jrectl.commands._context import AppContext


@click.command(
    cls=JreCommand,
    examples="""\
  jrectl build dist/
  jrectl --java-home /usr/lib/jvm/java-17 build dist/
  jrectl --json build dist/ --timeout 300
  jrectl -v build dist/ --no-check-exit""",
)
@click.argument(
    "dist_folder",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Kill java/jlink after this many seconds.",
)
@click.option(
    "--check-exit/--no-check-exit",
    "check_exit",
    default=None,
    help="Treat a non-zero java/jlink exit as failure (default: on).",
)
@click.pass_obj
def build(
    app: AppContext,
    dist_folder: Path,
    timeout: float | None,
    check_exit: bool | None,
) -> None:
    """Link every JDK module into DIST_FOLDER/jre."""
    from jrectl.services.build import BuildService

    app.emit(
        BuildService(app.settings).build(
            dist_folder, timeout=timeout, check_exit_status=check_exit
        )
    )
