"""Format a ServiceResult for display.

JSON mode dumps the result model as-is. Human mode dispatches on
``result.op`` to a Rich renderer; unknown ops fall through to a generic
key-value renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from housepatch.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from housepatch.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    verbose: bool = False
    width: int | None = None


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(width=settings.width)
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=settings.verbose)
    if settings.verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "hp.ok"), (f"  {result.op}", "hp.op")))


def _field(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    style = "hp.id" if key == "id" else "hp.name" if key == "name" else ""
    console.print(Text.assemble((f"{' ' * indent}{key}: ", "hp.key"), (str(value), style)))


def _rooms_table(rooms: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="hp.id", no_wrap=True)
    table.add_column("Name", style="hp.name")
    table.add_column("Color")
    table.add_column("Area", justify="right")
    for position, room in enumerate(rooms):
        table.add_row(
            str(position),
            str(room.get("id", "")),
            str(room.get("name") or ""),
            str(room.get("color") or ""),
            str(room.get("area", "")),
        )
    return table


def _render_house_fields(console: Console, house: dict[str, Any]) -> None:
    for key in ("id", "name", "color", "area"):
        _field(console, key, house.get(key))

    address = house.get("address")
    if address is None:
        _field(console, "address", "-")
    else:
        console.print(Text("  address:", style="hp.key"))
        for key in ("street", "house_number", "flat_number", "city", "country"):
            _field(console, key, address.get(key) or "-", indent=4)

    rooms = house.get("rooms") or []
    if rooms:
        console.print(Text(f"  rooms ({len(rooms)}):", style="hp.key"))
        console.print(_rooms_table(rooms))
    else:
        _field(console, "rooms", "none")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_house(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _render_house_fields(console, result.data)


def _render_update(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    if "operations" in result.data:
        _field(console, "operations", result.data["operations"])
    _render_house_fields(console, result.data.get("house", {}))


def _render_list(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if not items:
        console.print("  No houses.")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="hp.id", no_wrap=True)
    table.add_column("Name", style="hp.name")
    table.add_column("Color")
    for item in items:
        table.add_row(str(item["id"]), str(item.get("name") or ""), str(item.get("color") or ""))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    code = err.code if err else "ERROR"
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(
            ("ERROR", "hp.error"),
            (f"  {result.op}", "hp.op"),
            (f" [{code}] ", "hp.kind"),
            msg,
        )
    )
    if err and err.detail and (verbose or "kind" in err.detail):
        for key, value in err.detail.items():
            if value is not None:
                _field(console, key, value)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    for key, value in span.get("annotations", {}).items():
        line.append(f"  {key}={value}", style="dim")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "get_house": _render_house,
    "create_house": _render_house,
    "update_by_patch": _render_update,
    "update_by_replacement": _render_update,
    "list_houses": _render_list,
}
