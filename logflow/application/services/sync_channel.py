"""Sync Channel - cross-tab propagation of override state.

Two independent, redundant, best-effort transports:

1. Storage change: a tab that writes the persisted snapshot causes every
   other tab's change observer to ingest it via OverrideStore.replace_all.
2. Broadcast pulse: ``SYNC_REQUIRED`` after a local change, and
   ``FORCE_POPUP`` once per tick while anything is expiring soon, so that
   throttled background tabs re-read storage and surface the decision
   prompt promptly.

There is no ordering guarantee between the two transports. Handlers are
idempotent: re-ingesting the same snapshot changes nothing, and a tab only
writes when the encoded snapshot differs from what is stored, so tabs do
not echo each other's writes back and forth.

A malformed snapshot or message is discarded; the tab keeps its
last-known-good state.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from structlog import get_logger

from logflow.application.observability.tab_context import tab_scope
from logflow.application.ports.persistent_kv import PersistentKVPort
from logflow.application.ports.pubsub import PubSubPort
from logflow.application.services.override_store import OverrideStore
from logflow.domain.errors.sync import SnapshotDecodeError, SyncMessageError
from logflow.domain.events.sync_message import (
    FORCE_POPUP,
    SYNC_REQUIRED,
    SyncMessage,
)
from logflow.domain.models.override import Override
from logflow.domain.models.snapshot import decode_snapshot, encode_snapshot

logger = get_logger()

IngestListener = Callable[[tuple[Override, ...]], None]


class SyncChannel:
    """Keeps one tab's store in step with the shared snapshot.

    Attributes:
        _store: The tab's override store.
        _kv: Shared persisted snapshot store.
        _pubsub: Broadcast channel.
        _key: Storage key of the snapshot.
        _unsubscribers: Active subscriptions, released by stop().
    """

    def __init__(
        self,
        store: OverrideStore,
        kv: PersistentKVPort,
        pubsub: PubSubPort,
        storage_key: str,
        tab_id: str = "",
    ) -> None:
        self._store = store
        self._tab_id = tab_id
        self._kv = kv
        self._pubsub = pubsub
        self._key = storage_key
        self._unsubscribers: list[Callable[[], None]] = []
        self._listeners: list[IngestListener] = []
        self._pulses_sent = 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Subscribe to storage changes and broadcast pulses. Idempotent."""
        if self._unsubscribers:
            return
        self._unsubscribers.append(self._kv.on_change(self._scoped(self._on_storage_change)))
        self._unsubscribers.append(self._pubsub.subscribe(self._scoped(self._on_message)))
        logger.debug("sync_channel_started", storage_key=self._key)

    def stop(self) -> None:
        """Release every subscription. Idempotent."""
        while self._unsubscribers:
            self._unsubscribers.pop()()
        logger.debug("sync_channel_stopped", storage_key=self._key)

    @property
    def started(self) -> bool:
        return bool(self._unsubscribers)

    @property
    def pulses_sent(self) -> int:
        return self._pulses_sent

    def add_listener(self, listener: IngestListener) -> None:
        """Register a callback run after every successful ingest."""
        self._listeners.append(listener)

    # =========================================================================
    # Outbound
    # =========================================================================

    def hydrate(self) -> bool:
        """Load the persisted snapshot into the store, dropping expired rows.

        Returns:
            True if a snapshot was found and ingested.
        """
        raw = self._kv.get(self._key)
        if not raw:
            return False
        return self.ingest(raw)

    def persist(self) -> bool:
        """Write the store's snapshot if it differs from the stored one.

        Returns:
            True if a write happened.
        """
        encoded = encode_snapshot(self._store.snapshot())
        if encoded == self._kv.get(self._key):
            return False
        self._kv.set(self._key, encoded)
        return True

    def announce_change(self) -> bool:
        """Persist a locally originated change and ask peers to re-check.

        Returns:
            True if the snapshot changed and peers were signalled.
        """
        if not self.persist():
            return False
        self._publish(SYNC_REQUIRED)
        return True

    def pulse_force_popup(self) -> None:
        """Wake peers so a pending decision surfaces promptly."""
        self._publish(FORCE_POPUP)

    def clear_persisted(self) -> None:
        self._kv.remove(self._key)

    # =========================================================================
    # Inbound
    # =========================================================================

    def ingest(self, raw: str) -> bool:
        """Adopt a serialized snapshot, last-write-wins.

        Returns:
            False if the payload was malformed and discarded.
        """
        try:
            incoming = decode_snapshot(raw)
        except SnapshotDecodeError as e:
            logger.warning(
                "snapshot_discarded",
                storage_key=self._key,
                error=str(e),
            )
            return False

        snapshot = self._store.replace_all(incoming)
        # Expired rows were filtered; write back so peers converge on it
        self.persist()
        self._notify(snapshot)
        return True

    def _on_storage_change(self, key: str, new_value: str | None) -> None:
        if key != self._key:
            return
        if not new_value:
            # A removal (another tab logging out) carries no state to adopt
            logger.debug("snapshot_removed_elsewhere", storage_key=key)
            return
        self.ingest(new_value)

    def _on_message(self, data: Any) -> None:
        try:
            message = SyncMessage.parse(data)
        except SyncMessageError as e:
            logger.warning("sync_message_discarded", error=str(e))
            return

        logger.debug("sync_message_received", type=message.type.value)
        raw = self._kv.get(self._key)
        if raw:
            self.ingest(raw)
        else:
            self._notify(self._store.refresh())

    def _scoped(self, handler: Callable[..., None]) -> Callable[..., None]:
        """Run an inbound handler under this tab's log identity."""

        def run(*args: Any) -> None:
            if not self._tab_id:
                handler(*args)
                return
            with tab_scope(self._tab_id):
                handler(*args)

        return run

    def _publish(self, message: SyncMessage) -> None:
        self._pubsub.publish(message.to_dict())
        self._pulses_sent += 1

    def _notify(self, snapshot: tuple[Override, ...]) -> None:
        for listener in self._listeners:
            listener(snapshot)
