"""Expiry Clock - periodic recomputation of time-derived override state.

Each tick, in order:
1. Partition the store into expired (expiry_time <= now) and live
2. Drop the expired overrides and report them as reverted
3. Recompute is_expiring_soon for the live set and report the expiring set

Ticks are synchronous, pure recomputation and always complete. Listener
failures are logged and never abort the tick or later listeners.

The clock is inert while no operator session is active.
"""

from __future__ import annotations

from collections.abc import Callable

from structlog import get_logger

from logflow.application.ports.clock import ClockProtocol
from logflow.application.services.override_store import OverrideStore
from logflow.domain.events.override_event import TickResult

logger = get_logger()

TickListener = Callable[[TickResult], None]

IDLE_TITLE = "Logger Tracker | System Observability"
ALERT_TITLE = "⚠️ ACTION REQUIRED"


class ExpiryClock:
    """Drives expiry and expiring-soon transitions for one tab.

    Attributes:
        _store: The tab's override store.
        _clock: Time source.
        _listeners: Called with every TickResult, in registration order.
        _active: Whether an operator session is active.
        _flash_on: Alternates each tick while attention is required.
    """

    def __init__(self, store: OverrideStore, clock: ClockProtocol) -> None:
        self._store = store
        self._clock = clock
        self._listeners: list[TickListener] = []
        self._active = False
        self._flash_on = False
        self._tick_count = 0

    def activate(self) -> None:
        self._active = True

    def deactivate(self) -> None:
        self._active = False
        self._flash_on = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def add_listener(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    def tick(self) -> TickResult | None:
        """Run one evaluation of the clock against all active overrides.

        Returns:
            The tick outcome, or None when the clock is inert.
        """
        if not self._active:
            return None

        now = self._clock.now_ms()
        expired, live = self._store.partition_expired(now)
        result = TickResult(
            now=now,
            expired=tuple(expired),
            live=tuple(live),
            expiring=tuple(o for o in live if o.is_expiring_soon),
        )
        self._tick_count += 1
        self._flash_on = (not self._flash_on) if result.expiring else False

        if expired:
            logger.info(
                "overrides_expired",
                override_ids=[o.id for o in expired],
                services=[o.service_name for o in expired],
            )

        for listener in self._listeners:
            try:
                listener(result)
            except Exception as e:
                logger.error(
                    "tick_listener_failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return result

    @property
    def attention_required(self) -> bool:
        """Whether any override is expiring soon."""
        return bool(self._store.expiring())

    def title(self) -> str:
        """Window title for the current flash phase.

        While attention is required the title alternates between an alert
        banner and a count of expiring overrides on successive ticks.
        """
        expiring = self._store.expiring()
        if not expiring:
            return IDLE_TITLE
        if self._flash_on:
            return ALERT_TITLE
        return f"Tracker Alert ({len(expiring)})"
