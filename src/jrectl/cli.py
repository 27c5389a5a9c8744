"""Root CLI group for jrectl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from jrectl import __version__
from jrectl.commands import register_commands
from jrectl.commands._context import AppContext
from jrectl.config.settings import JreSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="jrectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and phase timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--java-home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="JDK to link from (default: JAVA_HOME).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    java_home: Path | None,
) -> None:
    """jrectl — build minimized Java runtime images with jlink."""
    settings = JreSettings.from_cli(
        config_path=config_path,
        java_home=java_home,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
