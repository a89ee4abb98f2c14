from __future__ import annotations

"""Persistence contract backing the current sections snapshot."""

import threading
from typing import List, Protocol, Sequence

from sectionkit.core.models import Section

__all__ = ["SectionStore", "InMemorySectionStore"]


class SectionStore(Protocol):
    """Minimal interface the observable service needs from a store."""

    def fetch_sections(self) -> List[Section]:
        ...

    def save_sections(self, sections: Sequence[Section]) -> List[Section]:
        ...


class InMemorySectionStore:
    """Default store keeping the snapshot in process memory."""

    def __init__(self, sections: Sequence[Section] = ()) -> None:
        self._sections: List[Section] = list(sections)
        self._lock = threading.Lock()

    def fetch_sections(self) -> List[Section]:
        with self._lock:
            return list(self._sections)

    def save_sections(self, sections: Sequence[Section]) -> List[Section]:
        with self._lock:
            self._sections = list(sections)
            return list(self._sections)
