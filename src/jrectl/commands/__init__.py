"""Subcommand modules for jrectl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from jrectl.commands.build import build
    from jrectl.commands.modules import modules

    cli.add_command(build)
    cli.add_command(modules)
