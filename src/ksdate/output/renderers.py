"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
``render`` and ``expand`` bypass Rich entirely: their output is the
rendered text itself, so it can be piped or embedded as is.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ksdate.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from ksdate.services.result import ServiceResult

_PLAIN_OPS = frozenset({"render", "expand"})


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    if result.ok and result.op in _PLAIN_OPS:
        return str(result.data.get("output", ""))

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
    if result.op in _PLAIN_OPS:
        return str(result.data.get("output", ""))
    if result.op == "preview":
        return str(result.data.get("shortcode", ""))
    if result.op == "issue_nonce":
        return str(result.data.get("nonce", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ksdate.ok"), Text(f"  {result.op}", style="ksdate.op"))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    for key, value in result.meta.items():
        console.print(Text(f"  {key}: ", style="ksdate.key") + Text(str(value)))


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="ksdate.key") + Text(_format_value(value)))
    if verbose:
        _render_meta(console, result)


def _render_preview(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="ksdate.key")
    table.add_column()
    table.add_row("Result", Text(str(result.data.get("result", "")), style="ksdate.value"))
    table.add_row(
        "Shortcode", Text(str(result.data.get("shortcode", "")), style="ksdate.shortcode")
    )
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_config(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for section, values in result.data.items():
        if isinstance(values, dict):
            console.print(Text(f"[{section}]", style="ksdate.op"))
            for key, value in values.items():
                console.print(Text(f"  {key} = ", style="ksdate.key") + Text(_format_value(value)))
        else:
            console.print(Text(f"{section} = ", style="ksdate.key") + Text(_format_value(values)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = f" [{result.error.code}]" if result.error else ""
    console.print(
        Text("ERROR", style="ksdate.error"),
        Text(f"  {result.op}{code} — {msg}"),
    )
    if verbose and result.error and result.error.detail:
        for key, value in result.error.detail.items():
            console.print(Text(f"  {key}: ", style="ksdate.key") + Text(_format_value(value)))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "preview": _render_preview,
    "show_config": _render_config,
}
