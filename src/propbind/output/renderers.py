"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from propbind.binding.model import REDACTED
from propbind.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from propbind.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pb.ok"), Text(f"  {result.op}", style="pb.op"))


def _value_text(value: Any) -> Text:
    if value is None:
        return Text("-", style="dim")
    if value == REDACTED:
        return Text(str(value), style="pb.redacted")
    return Text(str(value))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text.assemble((f"  {key}: ", "pb.key"), _value_text(value)))


def _render_list_types(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Name", style="pb.property", no_wrap=True)
    table.add_column("Class")
    table.add_column("Properties", justify="right")
    for item in result.data.get("items", []):
        table.add_row(Text(item["name"]), Text(item["class"]), str(item["properties"]))
    console.print(table)


def _render_describe(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(Text(f"{data['name']} ({data['class']})", style="bold"))
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Property", style="pb.property", no_wrap=True)
    table.add_column("Type")
    table.add_column("Default")
    table.add_column("Sensitive")
    table.add_column("Description")
    for prop in data.get("properties", []):
        default = Text("required", style="pb.warning") if prop["required"] else None
        table.add_row(
            Text(prop["key"]),
            Text(prop["type"]),
            default or _value_text(prop["default"]),
            Text("yes", style="pb.redacted") if prop["sensitive"] else Text(""),
            Text(prop["description"]),
        )
    console.print(table)

    if verbose and data.get("constraints"):
        console.print(Text("  constraints:", style="dim"))
        for rule in data["constraints"]:
            console.print(Text(f"    {rule['constraint']} ({rule['scope']}): {rule['message']}"))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.get("properties", {}).items():
        console.print(Text.assemble((f"  {key} = ", "pb.key"), _value_text(value)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pb.error"),
        Text(f"  {result.op}:", style="pb.op"),
        Text(msg),
    )
    if not err:
        return
    for problem in err.detail.get("problems", []):
        line = Text(f"  {', '.join(problem['keys'])}: ", style="pb.property")
        line.append(problem["message"])
        if verbose and problem.get("value") is not None:
            line.append(f" (value: {problem['value']})", style="dim")
        console.print(line)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list_types": _render_list_types,
    "describe": _render_describe,
    "check": _render_check,
}
