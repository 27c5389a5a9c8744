"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`; unknown
ops fall back to a generic key-value listing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from jrectl.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from jrectl.services.result import ServiceResult

Renderer = Callable[..., None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to text (plain when no terminal is attached)."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: the image path, the module names, or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "list_modules":
        return "\n".join(result.data.get("modules", []))
    if result.op == "build" and result.data.get("state") == "image_built":
        return str(result.data.get("target", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="jre.ok"), Text(f"  {result.op}", style="jre.op"))


def _field(console: Console, key: str, value: Any, *, style: str | None = None) -> None:
    console.print(Text(f"  {key}: ", style="jre.key"), Text(str(value), style=style or ""))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta or "telemetry" not in result.meta:
        return
    console.print()
    console.print(Text("  timing:", style="dim"))
    _render_span(console, result.meta["telemetry"], indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 10_000 else "yellow" if duration > 1000 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>9.2f}ms[/{style}]  {span.get('name', '?')}"
    notes = span.get("annotations") or {}
    if notes:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="jre.error"),
        Text(f"  {result.op}", style="jre.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    state = str(data.get("state", ""))
    _status_line(console, result)
    _field(console, "state", state, style=style_for_state(state))
    _field(console, "java_version", data.get("runtime_version", ""))
    _field(console, "target", data.get("target", ""), style="jre.path")
    _field(console, "modules", data.get("module_count", 0))
    if verbose:
        for role, path in (data.get("binaries") or {}).items():
            _field(console, role, path, style="jre.path")
        if data.get("command"):
            _field(console, "command", " ".join(data["command"]))


def _render_modules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "java_home", result.data.get("java_home", ""), style="jre.path")
    _field(console, "count", result.data.get("count", 0))
    for name in result.data.get("modules", []):
        console.print(Text(f"    {name}", style="jre.module"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "build": _render_build,
    "list_modules": _render_modules,
}
