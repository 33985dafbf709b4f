"""In-process shared storage with browser storage-event semantics.

A SharedStorage holds the key-value data for every tab in the process.
Each tab talks to it through its own StorageView; a write through one
view notifies the observers of every *other* view, never the writer's.
Delivery is synchronous and in registration order.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

from structlog import get_logger

from logflow.application.ports.persistent_kv import ChangeCallback, PersistentKVPort

logger = get_logger()


class SharedStorage:
    """Process-wide key-value data shared by all views."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._observers: dict[int, tuple[int, ChangeCallback]] = {}
        self._ids = count(1)
        self._view_ids = count(1)

    def view(self) -> StorageView:
        """Open a view for one tab."""
        return StorageView(self, next(self._view_ids))

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, view_id: int, key: str, value: str | None) -> None:
        if value is None:
            if key not in self._data:
                return
            del self._data[key]
        else:
            if self._data.get(key) == value:
                return
            self._data[key] = value
        self._dispatch(view_id, key, value)

    def observe(self, view_id: int, callback: ChangeCallback) -> Callable[[], None]:
        handle = next(self._ids)
        self._observers[handle] = (view_id, callback)

        def unsubscribe() -> None:
            self._observers.pop(handle, None)

        return unsubscribe

    def _dispatch(self, origin: int, key: str, value: str | None) -> None:
        for view_id, callback in list(self._observers.values()):
            if view_id == origin:
                continue
            try:
                callback(key, value)
            except Exception as e:
                logger.error(
                    "storage_observer_failed",
                    key=key,
                    error=str(e),
                    error_type=type(e).__name__,
                )


class StorageView(PersistentKVPort):
    """One tab's handle on a SharedStorage."""

    def __init__(self, storage: SharedStorage, view_id: int) -> None:
        self._storage = storage
        self._view_id = view_id

    def get(self, key: str) -> str | None:
        return self._storage.read(key)

    def set(self, key: str, value: str) -> None:
        self._storage.write(self._view_id, key, value)

    def remove(self, key: str) -> None:
        self._storage.write(self._view_id, key, None)

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        return self._storage.observe(self._view_id, callback)
