from __future__ import annotations

"""Pool of manually deleted items.

The cache is only consulted during page merges: an incoming item whose
identity is found here is treated as already known instead of new, so a page
re-sending a deleted item does not bring it back. Cached items are never
displayed and the cache is never pruned automatically; callers decide when
to :meth:`DeletionCache.clear` it.
"""

from typing import Iterable, Iterator, List, Optional

from sectionkit.core.models import Item

__all__ = ["DeletionCache"]


class DeletionCache:
    """Ordered pool of deleted items keyed by identity for lookups."""

    def __init__(self, items: Optional[Iterable[Item]] = None) -> None:
        self._items: List[Item] = list(items or [])

    def add(self, item: Item) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[Item]) -> None:
        self._items.extend(items)

    def find(self, identity: str) -> Optional[Item]:
        """Return the first cached item with *identity*, or ``None``."""
        for item in self._items:
            if item.identity == identity:
                return item
        return None

    def replace(self, item: Item) -> bool:
        """Swap the cached entry sharing *item*'s identity for *item*.

        Returns False when no entry has that identity.
        """
        for pos, cached in enumerate(self._items):
            if cached.identity == item.identity:
                self._items[pos] = item
                return True
        return False

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> List[Item]:
        return list(self._items)

    def __contains__(self, identity: object) -> bool:
        return any(item.identity == identity for item in self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
