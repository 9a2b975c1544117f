"""PolicyService — query and inspect a loaded policy.

Operations: decide (one can-depend verdict), classify (which layers an
identifier belongs to), validate (pattern compile errors and
configuration smells), show (normalized policy document, optionally
written back to a file).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pkgboundaries.infrastructure.policy_file import dump_policy
from pkgboundaries.services.base import BaseService
from pkgboundaries.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from pkgboundaries.domain.errors import ConfigParseError


def config_error_result(op: str, exc: ConfigParseError) -> ServiceResult:
    """Failed result for an operation that could not load its policy."""
    detail: dict[str, Any] = {"reason": exc.reason}
    if exc.path is not None:
        detail["path"] = str(exc.path)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="CONFIG_PARSE_ERROR", message=str(exc), detail=detail),
    )


class PolicyService(BaseService):
    """Read-only operations over a Policy."""

    def decide(self, layer: str, identifier: str) -> ServiceResult:
        """Evaluate whether *layer* may depend on *identifier*."""
        matched = self._policy.find_layers_for(identifier)
        rule = self._policy.find_rule_for(layer)
        decision = self._policy.can_depend(layer, identifier)

        warnings = self._pattern_warnings()
        if self._policy.find_layer(layer) is None:
            warnings.append(f"Layer {layer!r} is not declared")

        return ServiceResult(
            ok=True,
            op="decide",
            data={
                "layer": layer,
                "identifier": identifier,
                "decision": decision.value,
                "matched_layers": [m.name for m in matched],
                "rule_found": rule is not None,
            },
            warnings=warnings,
        )

    def classify(self, identifier: str) -> ServiceResult:
        """Report the layer that contains *identifier* plus every matching layer."""
        containing = self._policy.find_layer_containing(identifier)
        matched = self._policy.find_layers_for(identifier)
        return ServiceResult(
            ok=True,
            op="classify",
            data={
                "identifier": identifier,
                "layer": containing.name if containing is not None else None,
                "matched_layers": [m.name for m in matched],
            },
            warnings=self._pattern_warnings(),
        )

    def validate(self) -> ServiceResult:
        """Compile all patterns and report configuration smells.

        Compile errors fail the result. Shadowed rules, undeclared layer
        references and empty layers are warnings only.
        """
        errors = [
            {
                "layer": name,
                "pattern": err.pattern,
                "patterns": list(err.patterns),
                "message": str(err),
            }
            for name, err in self._policy.validate()
        ]

        warnings: list[str] = []
        for rule in self._policy.duplicate_rules():
            warnings.append(f"Rule for layer {rule.layer!r} is shadowed by an earlier rule")
        for name in self._policy.undeclared_references():
            warnings.append(f"Layer {name!r} is referenced by a rule but never declared")
        for layer in self._policy.empty_layers():
            warnings.append(f"Layer {layer.name!r} has no package names or patterns")

        data = {
            "layers": len(self._policy.layers),
            "rules": len(self._policy.rules),
            "errors": errors,
        }
        if errors:
            return ServiceResult(
                ok=False,
                op="validate",
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code="INVALID_PATTERNS",
                    message=f"{len(errors)} layer(s) have patterns that do not compile",
                    detail={"errors": errors},
                ),
            )
        return ServiceResult(ok=True, op="validate", data=data, warnings=warnings)

    def show(self, output: Path | None = None) -> ServiceResult:
        """Return the policy as a normalized document.

        With *output*, the normalized document is also written there.
        """
        data: dict[str, Any] = {"policy": self._policy.to_document().to_json_dict()}
        if output is not None:
            try:
                output.write_text(dump_policy(self._policy) + "\n", encoding="utf-8")
            except OSError as exc:
                return ServiceResult(
                    ok=False,
                    op="show",
                    error=ServiceError(
                        code="WRITE_ERROR",
                        message=f"{output}: {exc.strerror or exc}",
                        detail={"path": str(output)},
                    ),
                )
            data["written"] = str(output)
        return ServiceResult(ok=True, op="show", data=data)
