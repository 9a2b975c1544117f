"""Layer and Rule — the two declarative building blocks of a policy."""

from __future__ import annotations

from dataclasses import dataclass

from pkgboundaries.domain.decision import Decision
from pkgboundaries.domain.patterns import PackagePatternSet
from pkgboundaries.domain.sets import OrderedSet

# Rule-list token matching any layer.
WILDCARD = "*"


@dataclass(frozen=True)
class Layer:
    """A named set of identifiers, given literally and/or by patterns.

    An identifier belongs to the layer if it is one of ``package_names``
    or matches ``package_name_patterns``. A layer with neither matches nothing.
    """

    name: str
    package_names: OrderedSet[str] | None = None
    package_name_patterns: PackagePatternSet | None = None

    @property
    def key(self) -> str:
        return self.name

    @property
    def is_empty(self) -> bool:
        """True when no membership mechanism is configured."""
        return not self.package_names and not self.package_name_patterns

    def matches(self, identifier: str) -> bool:
        if self.package_names is not None and self.package_names.has(identifier):
            return True
        if self.package_name_patterns is not None and self.package_name_patterns.match(identifier):
            return True
        return False


def layer_key(layer: Layer) -> str:
    """Key function for OrderedSet[Layer]."""
    return layer.name


@dataclass(frozen=True)
class Rule:
    """Allowed/denied layer names for one dependant layer.

    Rules act as a blocklist: only a denied layer (or a ``*`` in
    ``denied``) turns the verdict into Deny. Listing a layer in
    ``allowed`` documents intent but never restricts anything. ``None``
    marks a list the document left out, as opposed to an empty one.
    """

    layer: str
    allowed: tuple[str, ...] | None = None
    denied: tuple[str, ...] | None = None

    def evaluate(self, matched: OrderedSet[Layer]) -> Decision:
        """Decide whether a dependency classified as *matched* is permitted."""
        decision = Decision.ALLOW
        for name in self.allowed or ():
            if name == WILDCARD or matched.has_key(name):
                decision &= Decision.ALLOW
        for name in self.denied or ():
            if name == WILDCARD or matched.has_key(name):
                decision &= Decision.DENY
        return decision

    def references(self) -> tuple[str, ...]:
        """Layer names this rule mentions, wildcard excluded."""
        return tuple(n for n in (*(self.allowed or ()), *(self.denied or ())) if n != WILDCARD)
