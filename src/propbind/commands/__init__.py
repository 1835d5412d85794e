"""Subcommand modules for propbind.

Provides register_commands() which uses deferred imports to keep
``propbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from propbind.commands.check import check
    from propbind.commands.describe import describe
    from propbind.commands.types_cmd import types_cmd

    cli.add_command(types_cmd)
    cli.add_command(describe)
    cli.add_command(check)
