"""Output mode dispatch.

The CLI renders ServiceResult for humans (Rich), for scripts (``--quiet``)
or for machines (``--json``). The formatter layer picks the mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from pkgboundaries.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from pkgboundaries.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output flags. When omitted, only *json_output* applies.
        json_output: Shortcut for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
