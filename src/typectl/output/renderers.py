"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from typectl.domain.stubs import MemberStubProvider
from typectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from typectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("alias", "")) for item in items)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="tc.ok"), Text(f"  {result.op}", style="tc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="tc.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="tc.id")
    elif key == "alias":
        v = Text(str(value), style="tc.alias")
    else:
        v = Text(str(value))
    console.print(k, v)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="tc.error")
    op = Text(f"  {result.op}", style="tc.op")
    console.print(label, op, " — ", msg)
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


# ── Success renderers ─────────────────────────────────────────────────


def _render_member_type(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("id", "alias", "name", "key"):
        _field(console, key, data.get(key, ""))
    if verbose:
        for key in ("description", "icon", "created", "modified"):
            if data.get(key):
                _field(console, key, data[key])

    standard = set(MemberStubProvider().aliases())
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="tc.id", no_wrap=True)
    table.add_column("Alias", style="tc.alias")
    table.add_column("Name")
    table.add_column("Group", style="tc.group")
    table.add_column("Data type")
    if verbose:
        table.add_column("Edit")
        table.add_column("View")
        table.add_column("Sensitive")

    for prop in data.get("property_types", []):
        alias = Text(prop["alias"], style="tc.standard" if prop["alias"] in standard else "")
        row: list[Any] = [
            str(prop["id"]),
            alias,
            prop["name"],
            prop["group"] or "-",
            prop["data_type"],
        ]
        if verbose:
            row.extend(
                "yes" if prop[flag] else "no"
                for flag in ("member_can_edit", "member_can_view", "is_sensitive")
            )
        table.add_row(*row)

    console.print()
    console.print(table)


def _render_type_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="tc.id", no_wrap=True)
    table.add_column("Alias", style="tc.alias")
    table.add_column("Name")
    table.add_column("Groups", justify="right")
    table.add_column("Properties", justify="right")
    if verbose:
        table.add_column("Key", style="dim")

    for item in result.data.get("items", []):
        row = [
            str(item["id"]),
            item["alias"],
            item["name"],
            str(item["groups"]),
            str(item["properties"]),
        ]
        if verbose:
            row.append(item["key"])
        table.add_row(*row)

    console.print()
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "create_type": _render_member_type,
    "get_type": _render_member_type,
    "list_types": _render_type_list,
}
