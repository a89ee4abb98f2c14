from __future__ import annotations

"""Shared data structures used across the sectionkit core.

This package exposes the value objects the services operate on. It is
intentionally free of I/O so that the contained objects can be reused in any
context (unit-tests, CLI, GUI, etc.).

All values are frozen: every operation in the services layer builds new
``Item`` / ``Section`` values instead of mutating the ones it was given.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from .engine_config import EngineConfig
from .events import CollectionEvent, EventKind
from .result import FetchResult

__all__ = [
    "Item",
    "Section",
    "Index",
    "FetchResult",
    "CollectionEvent",
    "EventKind",
    "EngineConfig",
]


@dataclass(frozen=True)
class Item:
    """A single entry of a section.

    Attributes
    ----------
    identity
        Stable key of the item. Matching across merges, deletes, updates and
        identity-based selection uses this field only.
    selected
        Selection flag maintained by the selection service.
    payload
        Opaque data carried along untouched by the engine.

    Concrete item types may subclass ``Item`` (keeping ``frozen=True``) and
    add their own fields.

    Items are hashable: ``payload`` is left out of the hash, so items can be
    kept in sets and used as dict keys whatever their payload holds.
    """

    identity: str
    selected: bool = False
    payload: Dict[str, Any] = field(default_factory=dict, hash=False)

    def with_selected(self, selected: bool) -> "Item":
        """Return a copy of this item with the selection flag set."""
        if self.selected == selected:
            return self
        return replace(self, selected=selected)

    def toggled(self) -> "Item":
        return replace(self, selected=not self.selected)


@dataclass(frozen=True)
class Section:
    """An ordered group of items plus its pagination state.

    Attributes
    ----------
    identity
        Stable key of the section, used to pair sections across merges.
    total_count
        Server-declared or computed total number of elements. May exceed
        ``len(items)`` while more pages remain.
    can_load_more
        Whether further pages exist for this section.
    items
        Items in display order.
    """

    identity: str
    total_count: int = 0
    can_load_more: bool = False
    items: Tuple[Item, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        if self.total_count < 0:
            raise ValueError(f"total_count cannot be negative (got {self.total_count})")

    def with_items(self, items: Iterable[Item], total_count: Optional[int] = None) -> "Section":
        """Return a copy holding *items*, optionally with a new total count."""
        if total_count is None:
            total_count = self.total_count
        return replace(self, items=tuple(items), total_count=total_count)

    def item_identities(self) -> Tuple[str, ...]:
        return tuple(item.identity for item in self.items)


@dataclass(frozen=True, order=True)
class Index:
    """Positional address of an item: ``(section, item)``.

    Ordering compares the section position first, then the item position.
    Positions are only meaningful against the snapshot they were computed
    from.
    """

    section: int
    item: int

    def __str__(self) -> str:
        return f"[{self.section}, {self.item}]"
