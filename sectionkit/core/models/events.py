from __future__ import annotations

"""Event descriptors emitted by the observable collection service."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

__all__ = ["EventKind", "CollectionEvent"]


class EventKind(Enum):
    REQUEST_COMPLETED = "request_completed"
    SORT_COMPLETED = "sort_completed"
    # Non-mutating: the user tapped an item while selection is notification-only
    ITEM_TAPPED = "item_tapped"
    ITEMS_SELECTED = "items_selected"
    INDICES_SELECTED = "indices_selected"
    ITEMS_INSERTED = "items_inserted"
    ITEMS_DELETED = "items_deleted"
    INDICES_DELETED = "indices_deleted"
    ITEMS_UPDATED = "items_updated"
    SECTIONS_UPDATED = "sections_updated"
    ITEMS_REPLACED = "items_replaced"


@dataclass(frozen=True)
class CollectionEvent:
    """Notification sent to subscribers after an operation completed.

    Attributes
    ----------
    kind
        Operation that produced the event.
    params
        Inputs of the operation (``page``, ``items``, ``indices``, ``sections``).
    result
        Resulting sections for mutating operations, the :class:`FetchResult`
        for ``REQUEST_COMPLETED`` and the tapped item for ``ITEM_TAPPED``.
    """

    kind: EventKind
    params: Dict[str, Any] = field(default_factory=dict)
    result: Any = None
