"""Rich Console factory and theme for pkgboundaries output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PKB_THEME = Theme(
    {
        "pkb.ok": "bold green",
        "pkb.error": "bold red",
        "pkb.warning": "bold yellow",
        "pkb.op": "bold cyan",
        "pkb.key": "dim",
        "pkb.path": "dim",
        "pkb.layer": "bold blue",
        "pkb.identifier": "bold",
        "pkb.allow": "bold green",
        "pkb.deny": "bold red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PKB_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_decision(decision: str) -> str:
    """Return the Rich style name for a decision value."""
    return "pkb.allow" if decision == "allow" else "pkb.deny"
