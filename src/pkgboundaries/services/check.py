"""CheckService — analyze Python sources against the policy.

For every unit: ask plugins whether to skip it, classify it by its
package, then decide each import edge. Units outside every layer are
skipped silently; denied edges become violations.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from pkgboundaries.domain.decision import Decision
from pkgboundaries.infrastructure.sources import DEFAULT_EXCLUDE, SourceUnit, iter_units
from pkgboundaries.services.base import BaseService
from pkgboundaries.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pkgboundaries.domain.layers import Layer
    from pkgboundaries.infrastructure.sources import ImportEdge

log = structlog.get_logger(__name__)


def violation_message(identifier: str, layer: str) -> str:
    return f'"{identifier}" cannot be imported by {layer}'


class CheckService(BaseService):
    """Runs the import-boundary check over source trees."""

    def check(
        self,
        paths: Iterable[Path],
        *,
        exclude: Iterable[str] = DEFAULT_EXCLUDE,
        project_root: Path | None = None,
    ) -> ServiceResult:
        """Report every import that the policy denies.

        The result is ``ok`` even when violations exist; callers decide
        the exit status from ``data["count"]``. Directory names under
        *project_root* decide which units count as tests.
        """
        started = time.perf_counter()
        paths = list(paths)
        violations: list[dict[str, Any]] = []
        warnings = self._pattern_warnings()
        checked = skipped = unclassified = 0

        for unit in iter_units(paths, exclude=exclude, project_root=project_root):
            if self._should_skip(unit):
                skipped += 1
                continue
            layer = self._policy.find_layer_containing(unit.package)
            if layer is None:
                unclassified += 1
                continue
            try:
                edges = unit.read_imports()
            except (SyntaxError, UnicodeDecodeError, OSError) as exc:
                log.warning("unit.unreadable", path=str(unit.path), error=str(exc))
                warnings.append(f"Skipped {unit.path}: {exc}")
                continue
            checked += 1
            violations.extend(self._check_unit(unit, layer, edges))

        log.debug(
            "check.complete",
            units_checked=checked,
            units_skipped=skipped,
            units_unclassified=unclassified,
            violations=len(violations),
        )
        self._dispatch_event(
            "post_check",
            {"violations_found": len(violations), "units_checked": checked},
            warnings,
        )

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "violations": violations,
                "count": len(violations),
                "units_checked": checked,
                "units_skipped": skipped,
                "units_unclassified": unclassified,
            },
            warnings=warnings,
            meta={
                "paths": [str(p) for p in paths],
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    def _check_unit(
        self,
        unit: SourceUnit,
        layer: Layer,
        edges: list[ImportEdge],
    ) -> list[dict[str, Any]]:
        found: list[dict[str, Any]] = []
        for edge in edges:
            if self._policy.can_depend(layer.name, edge.identifier) is Decision.ALLOW:
                continue
            found.append(
                {
                    "path": str(edge.path),
                    "line": edge.line,
                    "column": edge.column,
                    "module": unit.module,
                    "layer": layer.name,
                    "identifier": edge.identifier,
                    "message": violation_message(edge.identifier, layer.name),
                }
            )
        return found

    def _should_skip(self, unit: SourceUnit) -> bool:
        if self._plugins is None:
            return False
        answer = self._plugins.hook.skip_unit(
            module=unit.module,
            path=str(unit.path),
            is_test=unit.is_test,
        )
        return bool(answer)
