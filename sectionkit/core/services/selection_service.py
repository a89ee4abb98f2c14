from __future__ import annotations

"""Selection policies applied over a collection of sections.

Two policies are supported:

- *replace* (``select_new_*``): the targeted items become selected and every
  other item of the collection is deselected.
- *toggle* (``select_next_*``): each targeted item flips its flag; the rest of
  the collection is left untouched, so selecting twice deselects.

Targets are given either as items (matched by identity) or as positional
:class:`Index` values. Selection never mutates the given items; it returns
new sections holding copies with the updated flag.
"""

import logging
from collections import Counter
from typing import Iterable, List, Sequence

from sectionkit.core.models import Index, Item, Section

__all__ = ["SelectionService"]

logger = logging.getLogger(__name__)


class SelectionService:
    """Stateless implementation of the replace and toggle selection policies."""

    def select_new_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        identities = {item.identity for item in items}
        logger.debug("select_new_items targets=%d", len(identities))
        return [
            section.with_items(item.with_selected(item.identity in identities) for item in section.items)
            for section in sections
        ]

    def select_new_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        targets = set(indices)
        logger.debug("select_new_indices targets=%d", len(targets))
        return [
            section.with_items(
                item.with_selected(Index(section_pos, item_pos) in targets)
                for item_pos, item in enumerate(section.items)
            )
            for section_pos, section in enumerate(sections)
        ]

    def select_next_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        identities = {item.identity for item in items}
        logger.debug("select_next_items targets=%d", len(identities))
        new_sections: List[Section] = []
        for section in sections:
            if not any(item.identity in identities for item in section.items):
                new_sections.append(section)
                continue
            new_sections.append(section.with_items(
                item.toggled() if item.identity in identities else item
                for item in section.items
            ))
        return new_sections

    def select_next_indices(self, indices: Iterable[Index], sections: Sequence[Section]) -> List[Section]:
        """Toggle the item at every index.

        An index listed twice toggles its item twice. Out-of-range indices are
        skipped.
        """
        occurrences = Counter(indices)
        logger.debug("select_next_indices targets=%d", sum(occurrences.values()))
        new_sections: List[Section] = []
        for section_pos, section in enumerate(sections):
            new_items: List[Item] = []
            changed = False
            for item_pos, item in enumerate(section.items):
                if occurrences.get(Index(section_pos, item_pos), 0) % 2 == 1:
                    new_items.append(item.toggled())
                    changed = True
                else:
                    new_items.append(item)
            new_sections.append(section.with_items(new_items) if changed else section)
        return new_sections
