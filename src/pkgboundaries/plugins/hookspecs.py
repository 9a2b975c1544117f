"""Pluggy hook specifications for embedding pkgboundaries in other tools.

``skip_unit`` is the host skip predicate: the first plugin returning a
non-None answer decides. ``post_check`` is a notification fired once per
check run.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("pkgboundaries")


class BoundaryHookSpec:
    """Hook specifications for the pkgboundaries plugin system."""

    @hookspec(firstresult=True)
    def skip_unit(self, module: str, path: str, is_test: bool) -> bool | None:
        """Return True to exclude a unit from analysis, None to abstain."""

    @hookspec
    def post_check(self, violations_found: int, units_checked: int) -> None:
        """Called after a check run completes."""
