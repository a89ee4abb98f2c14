from __future__ import annotations

"""Stateful, event-emitting adapter over :class:`CollectionEngine`.

The service owns the current snapshot through a :class:`SectionStore` and
runs every operation as one non-interleaved unit:

    fetch current sections -> compute with the engine -> save

Subscribers receive a :class:`CollectionEvent` after each operation, once the
unit's lock has been released.
Page requests may be issued synchronously (:meth:`fetch_data`) or queued on a
single worker thread (:meth:`fetch_data_async`), which keeps requests in
submission order.

Examples
--------
    service = ObservableCollectionService(engine, request=api.fetch_page)
    unsubscribe = service.subscribe(renderer.on_event)
    future = service.fetch_data_async(1)
    future.result()
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from sectionkit.core.exceptions import FetchError
from sectionkit.core.models import CollectionEvent, EventKind, FetchResult, Index, Item, Section
from sectionkit.core.services.collection_engine import CollectionEngine
from sectionkit.core.services.section_store import InMemorySectionStore, SectionStore

__all__ = ["ObservableCollectionService", "PageRequest", "EventListener"]

logger = logging.getLogger(__name__)

PageRequest = Callable[[int, List[Section]], FetchResult]
EventListener = Callable[[CollectionEvent], None]


def _empty_request(page: int, sections: List[Section]) -> FetchResult:
    return FetchResult.ok([])


class ObservableCollectionService:
    """Hold the current sections, apply engine operations and notify subscribers.

    Parameters
    ----------
    engine : CollectionEngine, optional
        Engine computing every new snapshot.
    store : SectionStore, optional
        Backing store of the current snapshot; in-memory by default.
    request : callable, optional
        Page-fetch collaborator ``(page, sections) -> FetchResult``. Exceptions
        it raises are turned into failed results.
    """

    def __init__(
        self,
        engine: Optional[CollectionEngine] = None,
        store: Optional[SectionStore] = None,
        request: Optional[PageRequest] = None,
    ) -> None:
        self.engine = engine or CollectionEngine()
        self.store: SectionStore = store if store is not None else InMemorySectionStore()
        self._request: PageRequest = request or _empty_request
        self._listeners: List[EventListener] = []
        self._lock = threading.RLock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------
    # Subscription and persistence
    # ------------------------------------------------------------------
    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register *listener*; return a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def sections(self) -> List[Section]:
        return self.fetch_sections()

    def fetch_sections(self) -> List[Section]:
        """Return the current snapshot. Does not notify."""
        return self.store.fetch_sections()

    def save_sections(self, sections: Sequence[Section]) -> List[Section]:
        """Replace the current snapshot. Does not notify."""
        return self.store.save_sections(sections)

    # ------------------------------------------------------------------
    # Page requests
    # ------------------------------------------------------------------
    def fetch_data(self, page: int) -> FetchResult:
        """Request *page*, merge it with the current snapshot and save the result.

        On failure the snapshot is left untouched and the failed result is
        forwarded to subscribers and to the caller.
        """
        logger.info("Edit: fetch_data page=%d", page)
        with self._lock:
            sections = self.fetch_sections()
            try:
                response = self._request(page, list(sections))
            except Exception as e:
                logger.error("Edit FAIL: fetch_data page=%d error=%s", page, e, exc_info=True)
                response = FetchResult.fail(FetchError(f"Request for page {page} failed: {e}", page=page, cause=e))
            result = self.engine.handle_response(response, page, sections)
            if result.success:
                saved = self.save_sections(result.sections)
                result = FetchResult.ok(saved, result.message)
                logger.info("Edit OK: fetch_data page=%d sections=%d", page, len(saved))
            else:
                logger.warning("Edit FAIL: fetch_data page=%d message=%s", page, result.message)
        # Notify outside the lock so listeners may queue further requests and wait on them
        self._emit(CollectionEvent(EventKind.REQUEST_COMPLETED, {"page": page}, result))
        return result

    def fetch_data_async(self, page: int) -> "Future[FetchResult]":
        """Queue :meth:`fetch_data` on the single request worker."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sectionkit-request")
            return self._executor.submit(self.fetch_data, page)

    def close(self) -> None:
        """Wait for queued requests and stop the request worker."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "ObservableCollectionService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Local operations
    # ------------------------------------------------------------------
    def sort(self) -> List[Section]:
        return self._apply(EventKind.SORT_COMPLETED, {}, self.engine.sort)

    def select_items(self, items: Sequence[Item]) -> Optional[List[Section]]:
        """Select *items* by identity, or only notify a tap.

        While ``emit_selection_as_notification_only`` is set, the last item is
        reported as ``ITEM_TAPPED``, the snapshot is unchanged and ``None`` is
        returned.
        """
        items = list(items)
        if self.engine.emit_selection_as_notification_only:
            if items:
                self._emit(CollectionEvent(EventKind.ITEM_TAPPED, {"items": items}, items[-1]))
            return None
        return self._apply(
            EventKind.ITEMS_SELECTED, {"items": items},
            lambda sections: self.engine.select_items(items, sections),
        )

    def select_indices(self, indices: Sequence[Index]) -> Optional[List[Section]]:
        indices = list(indices)
        if self.engine.emit_selection_as_notification_only:
            if indices:
                item = self.engine.find(indices[-1], self.fetch_sections())
                if item is not None:
                    self._emit(CollectionEvent(EventKind.ITEM_TAPPED, {"indices": indices}, item))
            return None
        return self._apply(
            EventKind.INDICES_SELECTED, {"indices": indices},
            lambda sections: self.engine.select_indices(indices, sections),
        )

    def insert(self, items: Mapping[Index, Item]) -> List[Section]:
        items = dict(items)
        return self._apply(
            EventKind.ITEMS_INSERTED, {"items": items},
            lambda sections: self.engine.insert(items, sections),
        )

    def delete_items(self, items: Iterable[Item]) -> List[Section]:
        items = list(items)
        return self._apply(
            EventKind.ITEMS_DELETED, {"items": items},
            lambda sections: self.engine.delete_items(items, sections),
        )

    def delete_indices(self, indices: Iterable[Index]) -> List[Section]:
        indices = list(indices)
        return self._apply(
            EventKind.INDICES_DELETED, {"indices": indices},
            lambda sections: self.engine.delete_indices(indices, sections),
        )

    def update_items(self, items: Iterable[Item]) -> List[Section]:
        items = list(items)
        return self._apply(
            EventKind.ITEMS_UPDATED, {"items": items},
            lambda sections: self.engine.update_items(items, sections),
        )

    def update_sections(self, updates: Iterable[Section]) -> List[Section]:
        updates = list(updates)
        return self._apply(
            EventKind.SECTIONS_UPDATED, {"sections": updates},
            lambda sections: self.engine.update_sections(updates, sections),
        )

    def replace_items(self, items: Mapping[Index, Item]) -> List[Section]:
        items = dict(items)
        return self._apply(
            EventKind.ITEMS_REPLACED, {"items": items},
            lambda sections: self.engine.replace_items(items, sections),
        )

    # --------------------------------------------------------------- Internals

    def _apply(
        self,
        kind: EventKind,
        params: Dict[str, Any],
        operation: Callable[[List[Section]], List[Section]],
    ) -> List[Section]:
        logger.info("Edit: %s", kind.value)
        with self._lock:
            sections = self.fetch_sections()
            new_sections = operation(sections)
            saved = self.save_sections(new_sections)
        if new_sections == sections:
            logger.info("Edit noop: %s", kind.value)
        else:
            logger.info("Edit OK: %s sections=%d", kind.value, len(saved))
        self._emit(CollectionEvent(kind, params, saved))
        return saved

    def _emit(self, event: CollectionEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error("Listener failed for %s: %s", event.kind.value, e, exc_info=True)
