"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from pkgboundaries.output.console import create_console, get_output, style_for_decision

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from pkgboundaries.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
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

    if result.op == "check":
        return "\n".join(violation_line(v) for v in result.data.get("violations", []))
    if result.op == "decide":
        return str(result.data.get("decision", ""))
    if result.op == "classify":
        return str(result.data.get("layer") or "")

    return f"OK: {result.op}"


def violation_line(violation: dict[str, Any]) -> str:
    """``path:line:col: message`` — the format editors and CI annotators parse."""
    return (
        f"{violation['path']}:{violation['line']}:{violation['column']}: {violation['message']}"
    )


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="pkb.ok")
    op = Text(f"  {result.op}", style="pkb.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pkb.key")
    if key == "layer" or key.endswith("_layers"):
        v = Text(_plain(value), style="pkb.layer")
    elif key == "identifier":
        v = Text(_plain(value), style="pkb.identifier")
    elif key == "decision":
        v = Text(_plain(value), style=style_for_decision(str(value)))
    elif key == "path":
        v = Text(_plain(value), style="pkb.path")
    else:
        v = Text(_plain(value))
    console.print(k, v, sep="")


def _plain(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    return str(value)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    violations: list[dict[str, Any]] = result.data.get("violations", [])
    for violation in violations:
        line = Text()
        line.append(f"{violation['path']}:{violation['line']}:{violation['column']}:", "pkb.path")
        line.append(" ")
        line.append(violation["message"])
        console.print(line)
    if violations:
        console.print()

    _status_line(console, result)
    count = result.data.get("count", 0)
    summary = Text(f"  {count} violation{'s' if count != 1 else ''}")
    summary.stylize("pkb.deny" if count else "pkb.allow")
    summary.append(f" in {result.data.get('units_checked', 0)} checked unit(s)")
    console.print(summary)
    if verbose:
        _field(console, "units_skipped", result.data.get("units_skipped", 0))
        _field(console, "units_unclassified", result.data.get("units_unclassified", 0))
        _render_meta(console, result)


def _render_show(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print_json(data=result.data.get("policy", {}))


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    _field(console, "layers", result.data.get("layers", 0))
    _field(console, "rules", result.data.get("rules", 0))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    label = Text("ERROR", style="pkb.error")
    op = Text(f"  {result.op}", style="pkb.op")
    msg = result.error.message if result.error else "Unknown error"
    console.print(label, op, Text(f" — {msg}"), sep="")

    if result.error is None:
        return
    for err in result.error.detail.get("errors", []):
        console.print(Text(f"  {err.get('layer')}: {err.get('message')}", style="pkb.error"))
    if verbose:
        for key, value in result.error.detail.items():
            if key != "errors":
                _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check": _render_check,
    "show": _render_show,
    "validate": _render_validate,
}
