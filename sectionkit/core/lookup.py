from __future__ import annotations

"""Safe positional lookup helpers.

These helpers are side-effect-free and never raise for out-of-range
positions; they return ``None`` instead so callers can treat the target as
absent.
"""

from typing import Dict, Iterable, Optional, Sequence, TypeVar

from sectionkit.core.models import Index, Item, Section

__all__ = ["safe_index", "find", "find_many"]

T = TypeVar("T")


def safe_index(sequence: Sequence[T], i: int) -> Optional[T]:
    """Return ``sequence[i]`` when ``0 <= i < len(sequence)``, else ``None``.

    Negative positions are never interpreted from the end.

    >>> safe_index([1, 2, 3, 4], 1)
    2
    >>> safe_index([1, 2, 3, 4], 88) is None
    True
    >>> safe_index([1, 2, 3, 4], -1) is None
    True
    """
    if 0 <= i < len(sequence):
        return sequence[i]
    return None


def find(index: Index, sections: Sequence[Section]) -> Optional[Item]:
    """Return the item at *index*, or ``None`` if any component is out of range."""
    section = safe_index(sections, index.section)
    if section is None:
        return None
    return safe_index(section.items, index.item)


def find_many(indices: Iterable[Index], sections: Sequence[Section]) -> Dict[Index, Optional[Item]]:
    """Apply :func:`find` to every index. Duplicate indices map to the same key."""
    result: Dict[Index, Optional[Item]] = {}
    for index in indices:
        result[index] = find(index, sections)
    return result
