"""Persistent key-value port.

Models browser-style shared storage: every tab reads and writes the same
keys, and a tab is told about writes made by *other* tabs, never about
its own.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

# (key, new_value) - new_value is None when the key was removed
ChangeCallback = Callable[[str, "str | None"], None]


class PersistentKVPort(Protocol):
    """Port for the shared snapshot store.

    Implementations:
    - StorageView: In-process view over a SharedStorage
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` and notify every other observer of the change."""
        ...

    def remove(self, key: str) -> None:
        """Delete the key and notify every other observer. No-op if absent."""
        ...

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change observer.

        Returns:
            A function that unregisters the observer.
        """
        ...
