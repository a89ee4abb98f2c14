from __future__ import annotations

"""Structural edits on a collection of sections.

Scope and guarantees:
- Operates purely in-memory, returning new section lists; the sections
  passed in are never modified.
- Unknown identities and out-of-range positions are skipped silently, so
  every input produces a well-defined result.
- Count-changing operations (insert, delete) keep ``total_count`` in step;
  update and replace leave it untouched.

Deleted items are appended to a :class:`DeletionCache` when one is given.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from sectionkit.core.models import Index, Item, Section
from sectionkit.core.services.deletion_cache import DeletionCache

__all__ = ["MutationService"]

logger = logging.getLogger(__name__)


class MutationService:
    """Insert, delete, update and replace operations keyed by identity or position."""

    def insert(self, items: Mapping[Index, Item], sections: Sequence[Section]) -> List[Section]:
        """Insert each item at its index, incrementing the section total.

        Targets are applied in ascending index order against the section as
        updated by the previous targets, so each key is the final position of
        its item. A target is valid when its section exists and
        ``0 <= index.item <= len(items)``; invalid targets are skipped.
        """
        new_sections = list(sections)
        inserted = 0
        for index, item in sorted(items.items(), key=lambda kv: kv[0]):
            if not 0 <= index.section < len(new_sections):
                logger.debug("insert skipped: unknown section at %s", index)
                continue
            section = new_sections[index.section]
            if not 0 <= index.item <= len(section.items):
                logger.debug("insert skipped: position out of range at %s", index)
                continue
            new_items = list(section.items)
            new_items.insert(index.item, item)
            new_sections[index.section] = section.with_items(new_items, section.total_count + 1)
            inserted += 1
        logger.debug("insert applied=%d requested=%d", inserted, len(items))
        return new_sections

    def delete_items(
        self,
        items: Iterable[Item],
        sections: Sequence[Section],
        cache: Optional[DeletionCache] = None,
    ) -> List[Section]:
        """Remove every item whose identity matches one of *items*."""
        identities = {item.identity for item in items}
        new_sections: List[Section] = []
        for section in sections:
            kept = [item for item in section.items if item.identity not in identities]
            removed = [item for item in section.items if item.identity in identities]
            if not removed:
                new_sections.append(section)
                continue
            new_sections.append(self._without(section, kept, removed, cache))
        return new_sections

    def delete_indices(
        self,
        indices: Iterable[Index],
        sections: Sequence[Section],
        cache: Optional[DeletionCache] = None,
    ) -> List[Section]:
        """Remove the items at *indices*, all resolved against the given snapshot."""
        by_section: Dict[int, set] = {}
        for index in indices:
            by_section.setdefault(index.section, set()).add(index.item)

        new_sections: List[Section] = []
        for section_pos, section in enumerate(sections):
            positions = by_section.get(section_pos)
            if not positions:
                new_sections.append(section)
                continue
            kept = [item for pos, item in enumerate(section.items) if pos not in positions]
            removed = [item for pos, item in enumerate(section.items) if pos in positions]
            if not removed:
                new_sections.append(section)
                continue
            new_sections.append(self._without(section, kept, removed, cache))
        return new_sections

    def update_items(self, items: Iterable[Item], sections: Sequence[Section]) -> List[Section]:
        """Replace every item matching a target identity with the target, in place."""
        replacements: Dict[str, Item] = {}
        for item in items:
            # First target wins for duplicated identities
            replacements.setdefault(item.identity, item)
        new_sections: List[Section] = []
        for section in sections:
            if not any(item.identity in replacements for item in section.items):
                new_sections.append(section)
                continue
            new_sections.append(section.with_items(
                replacements.get(item.identity, item) for item in section.items
            ))
        return new_sections

    def update_sections(self, updates: Iterable[Section], sections: Sequence[Section]) -> List[Section]:
        """Swap whole sections matched by section identity; others pass through."""
        replacements: Dict[str, Section] = {}
        for section in updates:
            replacements.setdefault(section.identity, section)
        return [replacements.get(section.identity, section) for section in sections]

    def replace_items(self, items: Mapping[Index, Item], sections: Sequence[Section]) -> List[Section]:
        """Overwrite the item at each existing index regardless of identity."""
        by_section: Dict[int, Dict[int, Item]] = {}
        for index, item in items.items():
            by_section.setdefault(index.section, {})[index.item] = item

        new_sections: List[Section] = []
        for section_pos, section in enumerate(sections):
            targets = by_section.get(section_pos)
            if not targets or not any(0 <= pos < len(section.items) for pos in targets):
                new_sections.append(section)
                continue
            new_sections.append(section.with_items(
                targets.get(pos, item) for pos, item in enumerate(section.items)
            ))
        return new_sections

    # ----------------------- Small helpers -----------------------

    @staticmethod
    def _without(
        section: Section,
        kept: List[Item],
        removed: List[Item],
        cache: Optional[DeletionCache],
    ) -> Section:
        if cache is not None:
            cache.extend(removed)
        total = max(0, section.total_count - len(removed))
        logger.debug("delete section=%s removed=%d total=%d", section.identity, len(removed), total)
        return section.with_items(kept, total)
