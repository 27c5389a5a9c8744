"""Command: list the modules the configured JDK provides."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jrectl.commands._base import JreCommand

if TYPE_CHECKING:
    from jrectl.commands._context import AppContext


@click.command(
    cls=JreCommand,
    examples="""\
  jrectl modules
  jrectl -q modules
  jrectl --json --java-home /opt/jdk-21 modules""",
)
@click.pass_obj
def modules(app: AppContext) -> None:
    """Show the modules that a build would link."""
    from jrectl.services.build import BuildService

    app.emit(BuildService(app.settings).list_modules())
