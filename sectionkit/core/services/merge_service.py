from __future__ import annotations

"""Reconciliation of held sections with a freshly fetched page.

The merge keeps local state (selection, manual deletes) and never duplicates
an identity. For each section:

1. The matching pool is the section's current items plus, when given, the
   deletion cache.
2. Incoming items found in the pool are *known*: the update strategy decides
   the value kept for them, at the old position. Other incoming items are
   *fresh*, kept in incoming order.
3. Fresh items are appended for a load-more page (the incoming total is the
   authoritative grand total) or prepended for a first-page load (the total
   grows by the number of fresh items).
4. ``total_count`` is clamped to at least the number of held items, and
   ``can_load_more`` always comes from the incoming section.

Section pairing: held sections keep their order, held sections absent from
the page pass through unchanged. Sections only present in the page are
merged into an empty section of the same identity, so they get the same
duplicate and deletion-cache filtering, and are appended in page order.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from sectionkit.core.models import Item, Section
from sectionkit.core.services.deletion_cache import DeletionCache

__all__ = ["LoadDirection", "MergeService", "MergeUpdateStrategy", "keep_existing"]

logger = logging.getLogger(__name__)

MergeUpdateStrategy = Callable[[Item, Item], Item]


class LoadDirection(Enum):
    LOAD_FIRST = "load_first"
    LOAD_MORE = "load_more"


def keep_existing(old_item: Item, new_item: Item) -> Item:
    """Default update strategy: keep the held item untouched."""
    return old_item


class MergeService:
    """Merge incoming pages into held sections.

    Parameters
    ----------
    update_item : callable, optional
        Strategy ``(old_item, incoming_item) -> Item`` invoked for every
        incoming item whose identity is already known. Its return value
        replaces the held item. Defaults to :func:`keep_existing`.
    """

    def __init__(self, update_item: Optional[MergeUpdateStrategy] = None) -> None:
        self.update_item: MergeUpdateStrategy = update_item or keep_existing

    def merge_sections(
        self,
        old_sections: Sequence[Section],
        sections: Sequence[Section],
        direction: LoadDirection,
        cache: Optional[DeletionCache] = None,
    ) -> List[Section]:
        incoming: Dict[str, Section] = {}
        for section in sections:
            incoming.setdefault(section.identity, section)

        merged: List[Section] = []
        held = set()
        for old_section in old_sections:
            held.add(old_section.identity)
            section = incoming.get(old_section.identity)
            if section is None:
                merged.append(old_section)
            else:
                merged.append(self.merge_section(old_section, section, direction, cache))

        for section in sections:
            if section.identity not in held:
                held.add(section.identity)
                # Reconcile against an empty section so duplicates and cached deletes are filtered
                empty = replace(section, items=(), total_count=0)
                merged.append(self.merge_section(empty, section, direction, cache))
        logger.debug(
            "merge_sections direction=%s held=%d incoming=%d result=%d",
            direction.value, len(old_sections), len(sections), len(merged),
        )
        return merged

    def merge_section(
        self,
        old_section: Section,
        section: Section,
        direction: LoadDirection,
        cache: Optional[DeletionCache] = None,
    ) -> Section:
        current_items = list(old_section.items)
        positions: Dict[str, int] = {}
        for pos, item in enumerate(current_items):
            positions.setdefault(item.identity, pos)

        fresh_items: List[Item] = []
        fresh_identities = set()
        for item in section.items:
            pos = positions.get(item.identity)
            if pos is not None:
                current_items[pos] = self.update_item(current_items[pos], item)
                continue
            cached = cache.find(item.identity) if cache is not None else None
            if cached is not None:
                cache.replace(self.update_item(cached, item))
                continue
            if item.identity in fresh_identities:
                continue
            fresh_identities.add(item.identity)
            fresh_items.append(item)

        if direction is LoadDirection.LOAD_MORE:
            new_items = current_items + fresh_items
            total = max(section.total_count, old_section.total_count)
        else:
            new_items = fresh_items + current_items
            total = max(section.total_count, old_section.total_count + len(fresh_items))
        total = max(total, len(new_items))

        logger.debug(
            "merge_section id=%s direction=%s fresh=%d total=%d",
            old_section.identity, direction.value, len(fresh_items), total,
        )
        return replace(
            old_section,
            total_count=total,
            can_load_more=section.can_load_more,
            items=tuple(new_items),
        )
