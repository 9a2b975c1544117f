"""Domain layer — the layer/dependency policy engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

from pkgboundaries.domain.decision import Decision
from pkgboundaries.domain.errors import ConfigParseError, PatternCompileError, PolicyError
from pkgboundaries.domain.layers import WILDCARD, Layer, Rule
from pkgboundaries.domain.patterns import PackagePatternSet
from pkgboundaries.domain.policy import Policy
from pkgboundaries.domain.sets import OrderedSet

__all__ = [
    "WILDCARD",
    "ConfigParseError",
    "Decision",
    "Layer",
    "OrderedSet",
    "PackagePatternSet",
    "PatternCompileError",
    "Policy",
    "PolicyError",
    "Rule",
]
