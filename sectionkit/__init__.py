"""Top-level package for sectionkit.

sectionkit reconciles a paginated two-level collection (sections holding
items) with manual edits and freshly fetched pages while keeping item
identities stable. Front-ends should only depend on the public API exposed
here rather than importing internal modules directly.
"""

from .core.exceptions import ConfigurationError, FetchError, SectionKitError
from .core.lookup import find, find_many, safe_index
from .core.models import CollectionEvent, EngineConfig, EventKind, FetchResult, Index, Item, Section
from .core.services import (
    CollectionEngine,
    DeletionCache,
    InMemorySectionStore,
    LoadDirection,
    ObservableCollectionService,
)

__version__ = "0.1.0"

__all__: list[str] = [
    "CollectionEngine",
    "CollectionEvent",
    "ConfigurationError",
    "DeletionCache",
    "EngineConfig",
    "EventKind",
    "FetchError",
    "FetchResult",
    "InMemorySectionStore",
    "Index",
    "Item",
    "LoadDirection",
    "ObservableCollectionService",
    "Section",
    "SectionKitError",
    "find",
    "find_many",
    "safe_index",
]
