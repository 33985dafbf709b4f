"""Override Store - the tab-local canonical set of active overrides.

The store enforces the entity invariants and keeps the derived
``is_expiring_soon`` flag current: every mutating call recomputes the flag
for the whole resulting set before returning, so callers never observe a
stale value.

Invariants:
- At most one override per (service_id, env_id); create supersedes
- is_expiring_soon == (expiry_time - now < threshold) for every entry
- Snapshots preserve insertion order
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from structlog import get_logger

from logflow.application.ports.clock import ClockProtocol
from logflow.domain.models.override import EXPIRY_WARNING_THRESHOLD_MS, Override

logger = get_logger()

OverridePredicate = Callable[[Override], bool]


class OverrideStore:
    """In-memory, insertion-ordered set of overrides for one tab.

    Attributes:
        _clock: Source of ``now`` for derived state and renewal.
        _threshold_ms: Expiring-soon threshold.
        _entries: Overrides keyed by id, in insertion order.
    """

    def __init__(
        self,
        clock: ClockProtocol,
        expiry_warning_ms: int = EXPIRY_WARNING_THRESHOLD_MS,
    ) -> None:
        self._clock = clock
        self._threshold_ms = expiry_warning_ms
        self._entries: dict[str, Override] = {}

    # =========================================================================
    # Mutations
    # =========================================================================

    def create(self, entry: Override) -> Override:
        """Insert ``entry``, superseding any override for the same service/env.

        Args:
            entry: A validated override.

        Returns:
            The stored override with its derived flag computed.
        """
        superseded = [o.id for o in self._entries.values() if o.key == entry.key]
        for override_id in superseded:
            del self._entries[override_id]
        self._entries.pop(entry.id, None)
        self._entries[entry.id] = entry
        now = self._recompute()

        if superseded:
            logger.info(
                "override_superseded",
                service_id=entry.service_id,
                env_id=entry.env_id,
                superseded_ids=superseded,
                override_id=entry.id,
            )
        logger.debug(
            "override_created",
            override_id=entry.id,
            service_id=entry.service_id,
            env_id=entry.env_id,
            level=entry.level.value,
            expires_in_ms=entry.expiry_time - now,
        )
        return self._entries[entry.id]

    def renew(self, ids: str | Iterable[str]) -> list[Override]:
        """Extend matching overrides to ``now + total_duration``.

        Unknown ids are ignored, and so are overrides already past
        expiry_time: those belong to the next tick, which reverts them.
        Renewing the same id twice in a row leaves only the latest window.

        Args:
            ids: A single id or a collection of ids.

        Returns:
            The renewed overrides, in store order.
        """
        wanted = {ids} if isinstance(ids, str) else set(ids)
        now = self._clock.now_ms()
        renewed: list[Override] = []
        for override_id, override in list(self._entries.items()):
            if override_id not in wanted:
                continue
            if override.is_expired_at(now):
                logger.debug("renew_skipped_expired", override_id=override_id)
                continue
            self._entries[override_id] = override.renewed(now)
            renewed.append(self._entries[override_id])
        self._recompute(now)

        if renewed:
            logger.debug("overrides_renewed", override_ids=[o.id for o in renewed])
        return [self._entries[o.id] for o in renewed]

    def remove(self, target: str | OverridePredicate) -> list[Override]:
        """Remove the override with id ``target`` or every override matching it.

        Args:
            target: An override id or a predicate over overrides.

        Returns:
            The removed overrides, in store order.
        """
        if isinstance(target, str):
            removed = [o for o in self._entries.values() if o.id == target]
        else:
            removed = [o for o in self._entries.values() if target(o)]
        for override in removed:
            del self._entries[override.id]
        self._recompute()

        if removed:
            logger.debug("overrides_removed", override_ids=[o.id for o in removed])
        return removed

    def replace_all(self, snapshot: Iterable[Override]) -> tuple[Override, ...]:
        """Adopt an ingested snapshot, last-write-wins.

        Already-expired rows are dropped and duplicate (service_id, env_id)
        keys collapse to the last row seen, so supersede semantics hold
        even for a snapshot written by a racing tab.

        Returns:
            The resulting snapshot.
        """
        now = self._clock.now_ms()
        by_key: dict[tuple[str, str], Override] = {}
        dropped = 0
        for override in snapshot:
            if override.is_expired_at(now):
                dropped += 1
                continue
            by_key.pop(override.key, None)
            by_key[override.key] = override

        self._entries = {o.id: o for o in by_key.values()}
        self._recompute(now)

        logger.debug(
            "snapshot_ingested",
            count=len(self._entries),
            dropped_expired=dropped,
        )
        return self.snapshot()

    def partition_expired(
        self, now: int | None = None
    ) -> tuple[list[Override], list[Override]]:
        """Drop every override with expiry_time <= now.

        Args:
            now: The instant to evaluate at; read from the clock if omitted.

        Returns:
            (expired, live) where live carries recomputed derived flags.
        """
        if now is None:
            now = self._clock.now_ms()
        expired = [o for o in self._entries.values() if o.is_expired_at(now)]
        for override in expired:
            del self._entries[override.id]
        self._recompute(now)
        return expired, list(self._entries.values())

    def refresh(self) -> tuple[Override, ...]:
        """Recompute derived state without any other change."""
        self._recompute()
        return self.snapshot()

    def clear(self) -> None:
        self._entries.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    def snapshot(self) -> tuple[Override, ...]:
        return tuple(self._entries.values())

    def expiring(self) -> tuple[Override, ...]:
        """Live overrides expiring soon as of now.

        Derived flags are recomputed against the clock first. Overrides
        already past expiry_time are left out; the next tick reaps them.
        """
        now = self._recompute()
        return tuple(
            o
            for o in self._entries.values()
            if o.is_expiring_soon and not o.is_expired_at(now)
        )

    def get(self, override_id: str) -> Override | None:
        return self._entries.get(override_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, override_id: object) -> bool:
        return override_id in self._entries

    def _recompute(self, now: int | None = None) -> int:
        if now is None:
            now = self._clock.now_ms()
        self._entries = {
            override_id: override.with_derived_state(now, self._threshold_ms)
            for override_id, override in self._entries.items()
        }
        return now
