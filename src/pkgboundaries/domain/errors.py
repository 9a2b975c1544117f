"""Policy error taxonomy.

ConfigParseError is fatal: no Policy can be built.
PatternCompileError is recovered inside the engine (the affected pattern
set never matches) and surfaced only through validation.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path


class PolicyError(ValueError):
    """Base class for policy configuration errors."""


class ConfigParseError(PolicyError):
    """The policy document could not be read, decoded, or validated."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        self.reason = message
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class PatternCompileError(PolicyError):
    """A pattern set failed to assemble into one regular expression.

    Attributes:
        patterns: Every pattern of the failing set, in declaration order.
        pattern: The individual offending pattern, or None when each pattern
            compiles on its own but their union does not.
        cause: The underlying :class:`re.error`.
    """

    def __init__(
        self,
        patterns: Sequence[str],
        cause: re.error,
        *,
        pattern: str | None = None,
    ) -> None:
        self.patterns = tuple(patterns)
        self.pattern = pattern
        self.cause = cause
        if pattern is not None:
            msg = f"invalid pattern {pattern!r}: {cause}"
        else:
            msg = f"patterns {list(self.patterns)!r} cannot be combined: {cause}"
        super().__init__(msg)
