"""Command: bind and validate property files against a configuration type."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from propbind.commands._base import PropbindCommand

if TYPE_CHECKING:
    from propbind.commands._context import AppContext


def _parse_overrides(
    _ctx: click.Context,
    _param: click.Parameter,
    values: tuple[str, ...],
) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            msg = "expected KEY=VALUE"
            raise click.BadParameter(msg)
        overrides[key.strip()] = value.strip()
    return overrides


@click.command(
    cls=PropbindCommand,
    examples="""\
  propbind check mysql-event-listener etc/event-listener.properties
  propbind check lakehouse etc/catalog/lakehouse.properties --set lakehouse.table-type=hive
  propbind --strict check openlineage-transport etc/openlineage.properties""",
)
@click.argument("name")
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--set",
    "overrides",
    multiple=True,
    callback=_parse_overrides,
    metavar="KEY=VALUE",
    help="Override a property; wins over every file.",
)
@click.pass_obj
def check(app: AppContext, name: str, files: tuple[Path, ...], overrides: dict[str, str]) -> None:
    """Bind FILES (later files win) as configuration type NAME and validate the result."""
    app.emit(app.service.check(name, files, overrides=overrides))
