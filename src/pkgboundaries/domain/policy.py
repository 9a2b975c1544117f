"""Policy — ordered layers plus ordered rules, and the decision procedure.

One Policy corresponds to one loaded policy document. It is read-only
after construction and safe to share between threads; the only mutation
is each pattern set's one-time compilation, which is lock-guarded.

INVARIANT: No query on a Policy raises. Missing layers or rules yield
empty/None results, and a missing rule yields Deny.
"""

from __future__ import annotations

from collections.abc import Iterable

from pkgboundaries.domain.decision import Decision
from pkgboundaries.domain.document import LayerDocument, PolicyDocument, RuleDocument
from pkgboundaries.domain.errors import PatternCompileError
from pkgboundaries.domain.layers import Layer, Rule, layer_key
from pkgboundaries.domain.patterns import PackagePatternSet
from pkgboundaries.domain.sets import OrderedSet


class Policy:
    """Layered-architecture policy.

    Usage::

        policy = Policy(
            layers=[
                Layer("app", package_names=OrderedSet(["myapp.app"])),
                Layer("infra", package_name_patterns=PackagePatternSet([r"^myapp\\.infra"])),
            ],
            rules=[Rule("app", denied=("infra",))],
        )
        policy.can_depend("app", "myapp.infra.db")  # Decision.DENY
    """

    def __init__(self, layers: Iterable[Layer] = (), rules: Iterable[Rule] = ()) -> None:
        self._layers: OrderedSet[Layer] = OrderedSet(layers, key=layer_key)
        self._rules: tuple[Rule, ...] = tuple(rules)

    @property
    def layers(self) -> OrderedSet[Layer]:
        return self._layers

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_layer(self, name: str) -> Layer | None:
        return self._layers.get(name)

    def find_layers_for(self, identifier: str) -> OrderedSet[Layer]:
        """Return every layer whose membership predicate matches *identifier*."""
        return OrderedSet(
            (layer for layer in self._layers if layer.matches(identifier)),
            key=layer_key,
        )

    def find_layer_containing(self, identifier: str) -> Layer | None:
        """Return the first declared layer that contains *identifier*.

        Used to classify the unit being analyzed. When layers overlap,
        declaration order decides.
        """
        for layer in self._layers:
            if layer.matches(identifier):
                return layer
        return None

    def find_rule_for(self, dependant_layer: str) -> Rule | None:
        """Return the first rule governing *dependant_layer*.

        Later rules for the same layer are unreachable.
        """
        for rule in self._rules:
            if rule.layer == dependant_layer:
                return rule
        return None

    def can_depend(self, dependant_layer: str, identifier: str) -> Decision:
        """Decide whether *dependant_layer* may depend on *identifier*.

        A layer without any rule may depend on nothing.
        """
        matched = self.find_layers_for(identifier)
        rule = self.find_rule_for(dependant_layer)
        if rule is None:
            return Decision.DENY
        return rule.evaluate(matched)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def validate(self) -> list[tuple[str, PatternCompileError]]:
        """Compile every pattern set and return ``(layer name, error)`` pairs."""
        errors: list[tuple[str, PatternCompileError]] = []
        for layer in self._layers:
            if layer.package_name_patterns is None:
                continue
            err = layer.package_name_patterns.validate()
            if err is not None:
                errors.append((layer.name, err))
        return errors

    def duplicate_rules(self) -> list[Rule]:
        """Rules shadowed by an earlier rule for the same layer."""
        seen: set[str] = set()
        shadowed: list[Rule] = []
        for rule in self._rules:
            if rule.layer in seen:
                shadowed.append(rule)
            seen.add(rule.layer)
        return shadowed

    def undeclared_references(self) -> list[str]:
        """Layer names used by rules but never declared, in first-use order."""
        names: OrderedSet[str] = OrderedSet()
        for rule in self._rules:
            for name in (rule.layer, *rule.references()):
                if not self._layers.has_key(name):
                    names.add(name)
        return names.to_list()

    def empty_layers(self) -> list[Layer]:
        return [layer for layer in self._layers if layer.is_empty]

    # ------------------------------------------------------------------
    # Document conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_document(cls, doc: PolicyDocument) -> Policy:
        layers = [
            Layer(
                name=ld.name,
                package_names=None if ld.package_names is None else OrderedSet(ld.package_names),
                package_name_patterns=(
                    None
                    if ld.package_name_patterns is None
                    else PackagePatternSet(ld.package_name_patterns)
                ),
            )
            for ld in doc.layers or []
        ]
        rules = [
            Rule(
                layer=rd.layer,
                allowed=None if rd.allowed is None else tuple(rd.allowed),
                denied=None if rd.denied is None else tuple(rd.denied),
            )
            for rd in doc.rules or []
        ]
        return cls(layers=layers, rules=rules)

    def to_document(self) -> PolicyDocument:
        return PolicyDocument(
            layers=[
                LayerDocument(
                    name=layer.name,
                    package_names=(
                        None if layer.package_names is None else layer.package_names.to_list()
                    ),
                    package_name_patterns=(
                        None
                        if layer.package_name_patterns is None
                        else layer.package_name_patterns.to_list()
                    ),
                )
                for layer in self._layers
            ],
            rules=[
                RuleDocument(
                    layer=rule.layer,
                    allowed=None if rule.allowed is None else list(rule.allowed),
                    denied=None if rule.denied is None else list(rule.denied),
                )
                for rule in self._rules
            ],
        )

    def __repr__(self) -> str:
        return f"Policy(layers={[layer.name for layer in self._layers]!r}, rules={len(self._rules)})"
