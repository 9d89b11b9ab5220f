"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ddnsctl.output.console import create_console, get_output, style_for_bool, style_for_domain

if TYPE_CHECKING:
    from rich.console import Console

    from ddnsctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if result.op == "synthesize_address":
        return str(result.data.get("address", ""))
    if result.op == "read_domain_map":
        names = {name for key in ("ipv4", "ipv6") for name in result.data.get(key, [])}
        return "\n".join(sorted(names))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="ddns.ok")
    op = Text(f"  {result.op}", style="ddns.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ddns.key")
    v = Text(str(value), style="ddns.address" if key == "address" else "")
    console.print(k, v, sep="", end="")
    console.print()


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_domain_map(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    host_ids: dict[str, str] = result.data.get("host_ids", {})
    proxied: dict[str, bool] | None = result.data.get("proxied")

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Domain")
    table.add_column("IPv4")
    table.add_column("IPv6")
    table.add_column("Host ID")
    if proxied is not None:
        table.add_column("Proxied")

    ipv4 = set(result.data.get("ipv4", []))
    ipv6 = set(result.data.get("ipv6", []))
    for name in sorted(ipv4 | ipv6):
        row: list[Text] = [
            Text(name, style=style_for_domain(name)),
            Text("yes" if name in ipv4 else "-"),
            Text("yes" if name in ipv6 else "-"),
            Text(host_ids.get(name, "-"), style="ddns.address" if name in host_ids else ""),
        ]
        if proxied is not None:
            flag = proxied.get(name, False)
            row.append(Text(str(flag).lower(), style=style_for_bool(flag)))
        table.add_row(*row)

    if table.row_count:
        console.print(table)
    else:
        console.print(Text("  No domains configured", style="ddns.warning"))


def _render_expression(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "expression", result.data.get("expression", ""))
    for name, matched in result.data.get("matches", {}).items():
        console.print(
            Text(f"  {name}: ", style=style_for_domain(name)),
            Text(str(matched).lower(), style=style_for_bool(matched)),
            sep="",
            end="",
        )
        console.print()


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = f" [{result.error.code}]" if result.error else ""
    console.print(
        Text("ERROR", style="ddns.error"),
        Text(f"  {result.op}{code}", style="ddns.op"),
        sep="",
        end="",
    )
    console.print()
    console.print(Text(f"  {msg}"))


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "read_domain_map": _render_domain_map,
    "evaluate_expression": _render_expression,
}
