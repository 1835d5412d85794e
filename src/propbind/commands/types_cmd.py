"""Command: list registered configuration types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from propbind.commands._base import PropbindCommand

if TYPE_CHECKING:
    from propbind.commands._context import AppContext


@click.command(
    "types",
    cls=PropbindCommand,
    examples="""\
  propbind types
  propbind --json types""",
)
@click.pass_obj
def types_cmd(app: AppContext) -> None:
    """List configuration types contributed by plugins."""
    app.emit(app.service.list_types())
