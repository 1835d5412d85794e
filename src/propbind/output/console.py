"""Rich Console factory and theme for propbind output.

Consoles render into a StringIO buffer so renderers keep a
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich
disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PROPBIND_THEME = Theme(
    {
        "pb.ok": "bold green",
        "pb.error": "bold red",
        "pb.warning": "bold yellow",
        "pb.op": "bold cyan",
        "pb.key": "dim",
        "pb.property": "bold blue",
        "pb.redacted": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=PROPBIND_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
