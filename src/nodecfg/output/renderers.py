"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Every op a service can return has an entry; errors share one renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from nodecfg.output.console import create_console, get_output, style_for_entry

if TYPE_CHECKING:
    from rich.console import Console

    from nodecfg.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Raises:
        KeyError: If a successful result carries an op with no renderer.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Entries come out as ``key=value`` lines so the output can be piped
    straight into another tool.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "resolve_daemon":
        return "\n".join(f"{e['key']}={e['value']}" for e in result.data.get("entries", []))
    if result.op == "resolve_pool":
        return "\n".join(
            f"{e['section']}.{e['key']}={e['value']}" for e in result.data.get("entries", [])
        )
    if result.op == "list_directory":
        if result.data.get("selected"):
            return result.data["selected"]
        return "\n".join(item["path"] for item in result.data.get("items", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="nodecfg.ok")
    op = Text(f"  {result.op}", style="nodecfg.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="nodecfg.key")
    v = Text(str(value), style="nodecfg.path" if key == "path" else "")
    console.print(Text.assemble(k, v))


def _new_table() -> Table:
    return Table(show_header=True, show_lines=False, pad_edge=False, expand=False)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="nodecfg.error")
    op = Text(f"  {result.op}: ", style="nodecfg.op")
    console.print(label, op, Text(msg))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            if v is not None:
                console.print(Text(f"    {k}: {v}"))


# ── Resolution renderers ──────────────────────────────────────────────


def _render_daemon(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolved bitcoin.conf entries as a Key/Value/Enabled table."""
    d = result.data
    _status_line(console, result)
    _field(console, "path", d.get("path", ""))

    table = _new_table()
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")
    table.add_column("Enabled", justify="center")
    for entry in d.get("entries", []):
        if not verbose and not entry["enabled"]:
            continue
        style = style_for_entry(entry["enabled"])
        table.add_row(
            Text(entry["key"], style=style),
            Text(entry["value"], style=style),
            "yes" if entry["enabled"] else "no",
        )
    console.print(table)
    console.print(f"\n{d.get('enabled_count', 0)} of {d.get('count', 0)} keys set")


def _render_pool(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolved p2pool entries grouped by section."""
    d = result.data
    _status_line(console, result)
    _field(console, "path", d.get("path", ""))

    table = _new_table()
    table.add_column("Section", style="nodecfg.section", no_wrap=True)
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", justify="center")
    previous = None
    for entry in d.get("entries", []):
        section = entry["section"]
        style = style_for_entry(not entry["is_default"])
        table.add_row(
            section if section != previous else "",
            Text(entry["key"], style=style),
            Text(entry["value"], style=style),
            "yes" if entry["is_default"] else "no",
        )
        previous = section
    console.print(table)
    console.print(f"\n{d.get('explicit_count', 0)} of {d.get('count', 0)} values set explicitly")


def _render_listing(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a directory listing, directories first."""
    d = result.data
    _field(console, "path", d.get("path", ""))
    if d.get("selected"):
        _field(console, "selected", d["selected"])
    for item in d.get("items", []):
        if item["kind"] == "dir":
            console.print(Text(f"  {item['name']}/", style="nodecfg.dir"))
        else:
            console.print(Text(f"  {item['name']}"))
    if verbose:
        console.print(f"\n{d.get('count', 0)} entries")


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "resolve_daemon": _render_daemon,
    "resolve_pool": _render_pool,
    "list_directory": _render_listing,
}
