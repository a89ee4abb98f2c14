from __future__ import annotations

"""Reconciliation engine facade.

This module wires the selection, mutation and merge services together with
the engine's mutable state: its configuration flags and its deletion cache.
Every method takes a sections snapshot and returns a new one; the engine
never keeps the snapshot itself (see :mod:`observable_service` for the
stateful adapter).

Examples
--------
Merging a second page into held sections:

    engine = CollectionEngine(EngineConfig(retain_deleted_items=True))
    sections = engine.delete_items([item], sections)
    result = engine.handle_response(FetchResult.ok(page_two), 2, sections)
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from sectionkit.core import lookup
from sectionkit.core.models import EngineConfig, FetchResult, Index, Item, Section
from sectionkit.core.services.deletion_cache import DeletionCache
from sectionkit.core.services.merge_service import LoadDirection, MergeService, MergeUpdateStrategy
from sectionkit.core.services.mutation_service import MutationService
from sectionkit.core.services.selection_service import SelectionService

__all__ = ["CollectionEngine", "SectionGrouper", "SectionSorter"]

logger = logging.getLogger(__name__)

SectionSorter = Callable[[List[Section]], List[Section]]
SectionGrouper = Callable[[List[Section]], List[Section]]


class CollectionEngine:
    """Single entry point for every reconciliation operation.

    Parameters
    ----------
    config : EngineConfig, optional
        Behaviour flags. Defaults to ``EngineConfig()``.
    update_item : callable, optional
        Merge update strategy ``(old_item, incoming_item) -> Item``.
    sorter : callable, optional
        Strategy used by :meth:`sort`; defaults to keeping the order.
    grouper : callable, optional
        Strategy used by :meth:`group` to regroup items into sections;
        defaults to keeping the sections as they are.
    deletion_cache : DeletionCache, optional
        Pre-populated cache, e.g. restored by the caller.

    Notes
    -----
    An engine instance is not thread-safe. Callers that share one across
    threads must serialize access (the observable adapter holds a lock).
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        update_item: Optional[MergeUpdateStrategy] = None,
        sorter: Optional[SectionSorter] = None,
        deletion_cache: Optional[DeletionCache] = None,
        grouper: Optional[SectionGrouper] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.deletion_cache = deletion_cache if deletion_cache is not None else DeletionCache()
        self._selection = SelectionService()
        self._mutation = MutationService()
        self._merge = MergeService(update_item)
        self._sorter = sorter
        self._grouper = grouper

    # ------------------------------------------------------------------
    # Configuration flags
    # ------------------------------------------------------------------
    @property
    def retain_deleted_items(self) -> bool:
        return self.config.retain_deleted_items

    @retain_deleted_items.setter
    def retain_deleted_items(self, value: bool) -> None:
        self.config.retain_deleted_items = bool(value)

    @property
    def toggle_selection_mode(self) -> bool:
        return self.config.toggle_selection_mode

    @toggle_selection_mode.setter
    def toggle_selection_mode(self, value: bool) -> None:
        self.config.toggle_selection_mode = bool(value)

    @property
    def emit_selection_as_notification_only(self) -> bool:
        return self.config.emit_selection_as_notification_only

    @emit_selection_as_notification_only.setter
    def emit_selection_as_notification_only(self, value: bool) -> None:
        self.config.emit_selection_as_notification_only = bool(value)

    @property
    def merge_stale_fetched_pages(self) -> bool:
        return self.config.merge_stale_fetched_pages

    @merge_stale_fetched_pages.setter
    def merge_stale_fetched_pages(self, value: bool) -> None:
        self.config.merge_stale_fetched_pages = bool(value)

    @property
    def update_item(self) -> MergeUpdateStrategy:
        return self._merge.update_item

    @update_item.setter
    def update_item(self, strategy: MergeUpdateStrategy) -> None:
        self._merge.update_item = strategy

    # ------------------------------------------------------------------
    # Sorting and selection
    # ------------------------------------------------------------------
    def sort(self, sections: Sequence[Section]) -> List[Section]:
        if self._sorter is None:
            return list(sections)
        return list(self._sorter(list(sections)))

    def group(self, sections: Sequence[Section]) -> List[Section]:
        if self._grouper is None:
            return list(sections)
        return list(self._grouper(list(sections)))

    def select_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        if self.config.toggle_selection_mode:
            return self._selection.select_next_items(items, sections)
        return self._selection.select_new_items(items, sections)

    def select_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        if self.config.toggle_selection_mode:
            return self._selection.select_next_indices(indices, sections)
        return self._selection.select_new_indices(indices, sections)

    def select_new_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        return self._selection.select_new_items(items, sections)

    def select_new_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        return self._selection.select_new_indices(indices, sections)

    def select_next_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        return self._selection.select_next_items(items, sections)

    def select_next_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        return self._selection.select_next_indices(indices, sections)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------
    def insert(self, items: Mapping[Index, Item], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.insert(items, sections)

    def delete_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.delete_items(items, sections, self._active_cache())

    def delete_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.delete_indices(indices, sections, self._active_cache())

    def update_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.update_items(items, sections)

    def update_sections(self, updates: Iterable[Section], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.update_sections(updates, sections)

    def replace_items(self, items: Mapping[Index, Item], sections: Sequence[Section]) -> List[Section]:
        return self._mutation.replace_items(items, sections)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def find(self, index: Index, sections: Sequence[Section]) -> Optional[Item]:
        return lookup.find(index, sections)

    def find_many(self, indices: Iterable[Index], sections: Sequence[Section]) -> Dict[Index, Optional[Item]]:
        return lookup.find_many(indices, sections)

    # ------------------------------------------------------------------
    # Page merging
    # ------------------------------------------------------------------
    def load_direction_for(self, page: int) -> LoadDirection:
        if page > self.config.first_page:
            return LoadDirection.LOAD_MORE
        return LoadDirection.LOAD_FIRST

    def merge_sections(
        self,
        old_sections: Sequence[Section],
        sections: Sequence[Section],
        direction: LoadDirection,
    ) -> List[Section]:
        return self._merge.merge_sections(old_sections, sections, direction, self._active_cache())

    def merge_section(self, old_section: Section, section: Section, direction: LoadDirection) -> Section:
        return self._merge.merge_section(old_section, section, direction, self._active_cache())

    def handle_response(self, response: FetchResult, page: int, sections: Sequence[Section]) -> FetchResult:
        """Combine a fetch result with the held sections.

        A failed response is returned unchanged. A load-more page, or any page
        while ``merge_stale_fetched_pages`` is set, is merged into *sections*;
        otherwise the fetched sections replace them.
        """
        if not response.success:
            logger.debug("handle_response page=%d failure passthrough", page)
            return response
        direction = self.load_direction_for(page)
        if direction is LoadDirection.LOAD_MORE or self.config.merge_stale_fetched_pages:
            merged = self.merge_sections(sections, response.sections, direction)
            return FetchResult.ok(merged, response.message)
        logger.debug("handle_response page=%d replaced sections=%d", page, len(response.sections))
        return FetchResult.ok(response.sections, response.message)

    # ----------------------- Small helpers -----------------------

    def _active_cache(self) -> Optional[DeletionCache]:
        return self.deletion_cache if self.config.retain_deleted_items else None
