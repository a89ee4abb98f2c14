from __future__ import annotations

"""Reconciliation services (selection, structural edits, page merge).

``CollectionEngine`` is the facade most callers need; the observable service
adds a stored snapshot and event notifications on top of it.
"""

from .collection_engine import CollectionEngine  # noqa: F401
from .deletion_cache import DeletionCache  # noqa: F401
from .merge_service import LoadDirection, MergeService, keep_existing  # noqa: F401
from .mutation_service import MutationService  # noqa: F401
from .observable_service import ObservableCollectionService  # noqa: F401
from .section_store import InMemorySectionStore, SectionStore  # noqa: F401
from .selection_service import SelectionService  # noqa: F401

__all__: list[str] = [
    "CollectionEngine",
    "DeletionCache",
    "LoadDirection",
    "MergeService",
    "keep_existing",
    "MutationService",
    "ObservableCollectionService",
    "InMemorySectionStore",
    "SectionStore",
    "SelectionService",
]
