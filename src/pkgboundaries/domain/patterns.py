"""PackagePatternSet — lazily compiled composite matcher over regex patterns.

All patterns of a layer are assembled into a single alternation and
compiled once, so matching costs one regex search regardless of how many
patterns the layer declares.

INVARIANT: Compilation runs at most once per instance. A failed
compilation is sticky: the set then matches nothing, forever.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Iterator, Sequence
from enum import StrEnum

from pkgboundaries.domain.errors import PatternCompileError
from pkgboundaries.domain.sets import OrderedSet

logger = logging.getLogger(__name__)


class MatcherState(StrEnum):
    """Lifecycle of a pattern set's compiled matcher."""

    UNCOMPILED = "uncompiled"
    COMPILED = "compiled"
    FAILED = "failed"


def assemble(patterns: Sequence[str]) -> re.Pattern[str] | None:
    """Join *patterns* into one compiled alternation.

    Returns None for an empty sequence. Each pattern is checked on its own
    first so the error can name the offending one.

    Raises:
        PatternCompileError: if any pattern, or their union, is invalid.
    """
    if not patterns:
        return None
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise PatternCompileError(patterns, exc, pattern=pattern) from exc
    joined = "|".join(f"(?:{p})" for p in patterns)
    try:
        return re.compile(joined)
    except re.error as exc:
        raise PatternCompileError(patterns, exc) from exc


class PackagePatternSet:
    """Ordered set of pattern strings with a compile-once composite matcher.

    Matching is an unanchored search; anchor patterns with ``^``/``$``
    where a prefix or exact match is intended.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._set: OrderedSet[str] = OrderedSet(patterns)
        self._lock = threading.Lock()
        self._state = MatcherState.UNCOMPILED
        self._compiled: re.Pattern[str] | None = None
        self._error: PatternCompileError | None = None

    def add(self, pattern: str) -> bool:
        """Add a pattern. Only allowed before the first match."""
        with self._lock:
            if self._state is not MatcherState.UNCOMPILED:
                msg = "cannot add patterns after the set has been compiled"
                raise RuntimeError(msg)
            return self._set.add(pattern)

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._set.items()

    @property
    def state(self) -> MatcherState:
        return self._state

    @property
    def error(self) -> PatternCompileError | None:
        """Cached compile error; None if not compiled yet or compiled fine."""
        return self._error

    def validate(self) -> PatternCompileError | None:
        """Force compilation and return the cached error, if any."""
        self._compile_once()
        return self._error

    def match(self, identifier: str) -> bool:
        compiled = self._compile_once()
        if compiled is None:
            return False
        return compiled.search(identifier) is not None

    def _compile_once(self) -> re.Pattern[str] | None:
        if self._state is not MatcherState.UNCOMPILED:
            return self._compiled
        with self._lock:
            # Another thread may have compiled while we waited.
            if self._state is MatcherState.UNCOMPILED:
                try:
                    self._compiled = assemble(self._set.items())
                except PatternCompileError as exc:
                    self._error = exc
                    self._state = MatcherState.FAILED
                    logger.warning("Pattern set disabled: %s", exc)
                else:
                    self._state = MatcherState.COMPILED
        return self._compiled

    def to_list(self) -> list[str]:
        return self._set.to_list()

    def __len__(self) -> int:
        return len(self._set)

    def __iter__(self) -> Iterator[str]:
        return iter(self._set)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackagePatternSet):
            return NotImplemented
        return self.patterns == other.patterns

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PackagePatternSet({list(self.patterns)!r}, state={self._state.value})"
