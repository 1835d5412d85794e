"""Root CLI group for propbind with global flags and command registration."""

from __future__ import annotations

import click

from propbind import __version__
from propbind.commands import register_commands
from propbind.commands._context import AppContext
from propbind.config.settings import PropbindSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="propbind")
@click.option("--json", "json_output", is_flag=True, default=None, help="Structured JSON output.")
@click.option(
    "-v", "--verbose", is_flag=True, default=None, help="Debug logging and detailed output."
)
@click.option(
    "--log-json", is_flag=True, default=None, help="Structured JSON log output to stderr."
)
@click.option(
    "--strict", is_flag=True, default=None, help="Reject properties that match no field."
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool | None,
    verbose: bool | None,
    log_json: bool | None,
    strict: bool | None,
) -> None:
    """propbind — bind and validate plugin configuration properties."""
    settings = PropbindSettings.from_cli(
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        strict=strict,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
