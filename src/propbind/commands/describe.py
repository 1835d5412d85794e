"""Command: document the properties of a configuration type."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from propbind.commands._base import PropbindCommand

if TYPE_CHECKING:
    from propbind.commands._context import AppContext


@click.command(
    cls=PropbindCommand,
    examples="""\
  propbind describe lakehouse
  propbind -v describe mysql-event-listener
  propbind --json describe openlineage-transport""",
)
@click.argument("name")
@click.pass_obj
def describe(app: AppContext, name: str) -> None:
    """Show keys, types, defaults, and descriptions of NAME's properties."""
    app.emit(app.service.describe(name))
