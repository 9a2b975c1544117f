"""OrderedSet — insertion-ordered collection deduplicated by a derived key.

Every named collection in the policy model (package names, patterns,
layers) is an OrderedSet. Persisted form is a plain list so that policy
files round-trip deterministically.

INVARIANT: The first item inserted for a key wins; later duplicates are dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _identity(item: Any) -> Hashable:
    return item


class OrderedSet(Generic[T]):
    """Ordered sequence of items plus a key -> position index.

    Args:
        items: Initial items, inserted in order through :meth:`add`.
        key: Derives the deduplication key of an item. Defaults to the
            item itself, which suits plain strings.

    Examples:
        >>> s = OrderedSet(["b", "a", "b"])
        >>> s.items()
        ('b', 'a')
        >>> s.has_key("a")
        True
    """

    __slots__ = ("_index", "_items", "_key")

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        key: Callable[[T], Hashable] = _identity,
    ) -> None:
        self._items: list[T] = []
        self._index: dict[Hashable, int] = {}
        self._key = key
        for item in items:
            self.add(item)

    @classmethod
    def from_list(
        cls,
        values: Iterable[T],
        *,
        key: Callable[[T], Hashable] = _identity,
    ) -> OrderedSet[T]:
        """Rebuild a set from its list form, collapsing duplicates in file order."""
        return cls(values, key=key)

    def add(self, item: T) -> bool:
        """Insert *item* unless its key is already present.

        Returns True when the item was inserted.
        """
        k = self._key(item)
        if k in self._index:
            return False
        self._index[k] = len(self._items)
        self._items.append(item)
        return True

    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    def has(self, item: T) -> bool:
        return self._key(item) in self._index

    def has_key(self, key: Hashable) -> bool:
        return key in self._index

    def get(self, key: Hashable) -> T | None:
        """Return the item stored under *key*, or None."""
        pos = self._index.get(key)
        if pos is None:
            return None
        return self._items[pos]

    def to_list(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        try:
            return self.has(item)  # type: ignore[arg-type]
        except (AttributeError, TypeError):
            return False

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedSet):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"
