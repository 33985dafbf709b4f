"""Override Engine - one tab's override lifecycle, wired from injected ports.

The engine composes the store, expiry clock, sync channel, notification
dispatcher and decision gate, and exposes the operator actions.

Control flow:
    operator action / tick
        -> mutation intent (create, renew, remove, expire)
        -> OverrideStore applies it and recomputes derived state
        -> snapshot persisted, SYNC_REQUIRED published
        -> NotificationDispatcher inspects the delta
        -> DecisionGate re-evaluates the expiring set

Operating Rules:
1. OPTIMISTIC - local state changes immediately; remote calls never gate it
2. BOUNDED - every remote call has a finite timeout; timeout is failure
3. CONTAINED - remote, sync and notification failures are recovered where
   they happen and never reach the tick loop
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from structlog import get_logger

from logflow.application.observability.tab_context import (
    generate_tab_id,
    tab_scope,
)
from logflow.application.ports.clock import ClockProtocol
from logflow.application.ports.notification_surface import NotificationSurfacePort
from logflow.application.ports.persistent_kv import PersistentKVPort
from logflow.application.ports.pubsub import PubSubPort
from logflow.application.ports.remote_applier import RemoteApplierPort
from logflow.application.ports.ticker import TickerProtocol
from logflow.application.services.decision_gate import (
    DecisionGate,
    DecisionOutcome,
    GateState,
)
from logflow.application.services.expiry_clock import ExpiryClock
from logflow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from logflow.application.services.override_store import OverrideStore
from logflow.application.services.sync_channel import SyncChannel
from logflow.config.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from logflow.domain.errors.override import DurationValidationError
from logflow.domain.errors.session import SessionNotActiveError
from logflow.domain.events.override_event import ApplyResult, TickResult
from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.override import Override
from logflow.domain.models.service import ServiceCatalog

logger = get_logger()


@dataclass(frozen=True)
class OperatorSession:
    """The signed-in operator for a tab.

    Attributes:
        username: Operator name, for logs.
        connected_env: Environment whose backend the applier talks to.
            Remote renew/revert is only attempted for overrides in it.
        demo_mode: Skip the backend entirely; every apply succeeds.
    """

    username: str
    connected_env: str
    demo_mode: bool = False


class OverrideEngine:
    """Override lifecycle engine for a single tab.

    Attributes:
        tab_id: Log identity of this tab.
        store: Canonical local override set.
        expiry_clock: Per-tick expiry and expiring-soon recomputation.
        sync: Cross-tab storage and broadcast propagation.
        notifications: De-duplicated alert dispatch.
        gate: Keep-vs-reset decision over the expiring set.
    """

    def __init__(
        self,
        *,
        clock: ClockProtocol,
        kv: PersistentKVPort,
        pubsub: PubSubPort,
        ticker: TickerProtocol,
        remote_applier: RemoteApplierPort,
        notifier: NotificationSurfacePort,
        catalog: ServiceCatalog | None = None,
        config: EngineConfig | None = None,
        tab_id: str | None = None,
    ) -> None:
        self._clock = clock
        self._ticker = ticker
        self._remote = remote_applier
        self._catalog = catalog or ServiceCatalog()
        self._config = config or DEFAULT_ENGINE_CONFIG
        self.tab_id = tab_id or generate_tab_id()

        self.store = OverrideStore(clock, self._config.expiry_warning_ms)
        self.expiry_clock = ExpiryClock(self.store, clock)
        self.sync = SyncChannel(
            self.store, kv, pubsub, self._config.storage_key, tab_id=self.tab_id
        )
        self.notifications = NotificationDispatcher(notifier)
        self.gate = DecisionGate(self.store, self._extend_remote)

        self.expiry_clock.add_listener(self._on_tick)
        self.sync.add_listener(self._on_ingest)
        self.gate.add_listener(self._on_resolved)

        self._session: OperatorSession | None = None
        self._background: set[asyncio.Task[bool]] = set()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def session(self) -> OperatorSession | None:
        return self._session

    @property
    def running(self) -> bool:
        return self._session is not None

    def start(self, session: OperatorSession) -> None:
        """Begin a session: hydrate, subscribe to peers and start ticking.

        Calling start while running replaces the session.
        """
        with tab_scope(self.tab_id):
            self._session = session
            self.sync.hydrate()
            self.sync.start()
            self.expiry_clock.activate()
            self._ticker.start(self.tick, self._config.tick_interval_seconds)
            self.gate.evaluate()
            logger.info(
                "engine_started",
                username=session.username,
                connected_env=session.connected_env,
                demo_mode=session.demo_mode,
                overrides=len(self.store),
            )

    def stop(self) -> None:
        """Stop ticking and release subscriptions.

        In-flight remote calls are not cancelled; they run to completion.
        """
        with tab_scope(self.tab_id):
            self._ticker.stop()
            self.expiry_clock.deactivate()
            self.sync.stop()
            if self._session is not None:
                logger.info("engine_stopped", username=self._session.username)
            self._session = None

    def logout(self) -> None:
        """Stop and discard all override state, local and persisted."""
        self.stop()
        with tab_scope(self.tab_id):
            self.store.clear()
            self.notifications.reset()
            self.sync.clear_persisted()
            self.gate.evaluate()

    # =========================================================================
    # Clock
    # =========================================================================

    def tick(self) -> TickResult | None:
        """Run one expiry clock evaluation. Inert without a session."""
        with tab_scope(self.tab_id):
            return self.expiry_clock.tick()

    def refresh(self) -> GateState:
        """Recompute derived state, e.g. when the tab becomes visible again."""
        with tab_scope(self.tab_id):
            self.store.refresh()
            return self.gate.evaluate()

    def _on_tick(self, result: TickResult) -> None:
        self.notifications.observe(result)

        for override in result.expired:
            self._spawn_revert(override, reason="expired")

        if result.expiring:
            # Keep waking throttled peers for as long as a decision is due
            self.sync.pulse_force_popup()

        if result.expired:
            self.sync.announce_change()

        self.gate.evaluate()

    def _on_ingest(self, _snapshot: tuple[Override, ...]) -> None:
        self.gate.evaluate()

    # =========================================================================
    # Operator actions
    # =========================================================================

    async def apply_overrides(
        self,
        service_ids: Iterable[str],
        level: LogLevel | str,
        duration_ms: int,
        env_id: str | None = None,
    ) -> ApplyResult:
        """Elevate each service's log level and record the successes.

        Remote applies run concurrently, each bounded by the configured
        timeout. In demo mode the backend is skipped and every apply
        succeeds. A failed apply records nothing for that service.

        Args:
            service_ids: Services to override; duplicates are ignored.
            level: Target severity.
            duration_ms: Override lifetime; must be positive.
            env_id: Target environment, defaults to the connected one.

        Returns:
            Created overrides and the names of services that failed.

        Raises:
            SessionNotActiveError: If no session is active.
            DurationValidationError: If duration_ms is not positive.
            ValueError: If level is not a known level.
        """
        session = self._require_session("apply overrides")
        if duration_ms <= 0:
            raise DurationValidationError(duration_ms)
        target_level = LogLevel.parse(level)
        env = env_id or session.connected_env
        ids = list(dict.fromkeys(service_ids))

        with tab_scope(self.tab_id):
            log = logger.bind(
                operation="apply_overrides",
                level=target_level.value,
                env_id=env,
                duration_ms=duration_ms,
            )
            outcomes = await asyncio.gather(
                *(
                    self._apply_one(session, sid, target_level, duration_ms)
                    for sid in ids
                )
            )

            now = self._clock.now_ms()
            created: list[Override] = []
            failed: list[str] = []
            for service_id, ok in zip(ids, outcomes):
                if not ok:
                    failed.append(self._catalog.name_of(service_id))
                    continue
                entry = Override.create(
                    service_id=service_id,
                    service_name=self._catalog.name_of(service_id),
                    env_id=env,
                    level=target_level,
                    duration_ms=duration_ms,
                    now=now,
                )
                created.append(self.store.create(entry))

            if created:
                self.sync.announce_change()
                self.gate.evaluate()

            if failed:
                log.warning("apply_partially_failed", failed=failed, created=len(created))
            else:
                log.info("apply_complete", created=len(created))

            return ApplyResult(created=tuple(created), failed=tuple(failed))

    async def renew(self, override_id: str) -> Override | None:
        """Restart one override's window and extend it on the backend.

        Returns:
            The renewed override, or None if the id is unknown or the
            override has already expired.
        """
        with tab_scope(self.tab_id):
            renewed = self.store.renew(override_id)
            if not renewed:
                return None
            override = renewed[0]
            self.notifications.forget([override.id])
            self.sync.announce_change()
            self.gate.evaluate()

            failed = await self._extend_remote((override,))
            if failed:
                logger.warning("renew_remote_failed", services=list(failed))
            return override

    def remove(self, override_id: str) -> Override | None:
        """Remove one override now and revert its service optimistically.

        The local removal stands whatever the revert's outcome.

        Returns:
            The removed override, or None if the id is unknown.
        """
        with tab_scope(self.tab_id):
            removed = self.store.remove(override_id)
            if not removed:
                return None
            override = removed[0]
            self.notifications.forget([override.id])
            self.sync.announce_change()
            self.gate.evaluate()
            self._spawn_revert(override, reason="removed")
            return override

    async def keep_all(self) -> DecisionOutcome:
        """Resolve the pending decision by renewing every expiring override."""
        with tab_scope(self.tab_id):
            return await self.gate.keep_all()

    def accept_all(self) -> DecisionOutcome:
        """Resolve the pending decision by dropping every expiring override."""
        with tab_scope(self.tab_id):
            return self.gate.accept_all()

    def _on_resolved(self, outcome: DecisionOutcome) -> None:
        self.notifications.forget(o.id for o in outcome.overrides)
        self.sync.announce_change()

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def overrides(self) -> tuple[Override, ...]:
        return self.store.snapshot()

    @property
    def expiring(self) -> tuple[Override, ...]:
        return self.store.expiring()

    @property
    def attention_required(self) -> bool:
        return self.expiry_clock.attention_required

    @property
    def title(self) -> str:
        return self.expiry_clock.title()

    # =========================================================================
    # Remote calls
    # =========================================================================

    async def wait_for_background(self) -> None:
        """Wait for every spawned remote call to finish."""
        while self._background:
            await asyncio.gather(*list(self._background))

    def _remote_enabled_for(self, override: Override) -> bool:
        session = self._session
        return (
            session is not None
            and not session.demo_mode
            and override.env_id == session.connected_env
        )

    async def _apply_one(
        self,
        session: OperatorSession,
        service_id: str,
        level: LogLevel,
        duration_ms: int,
    ) -> bool:
        if session.demo_mode:
            return True
        return await self._bounded(
            lambda: self._remote.apply(service_id, level, duration_ms),
            operation="apply",
            service_id=service_id,
        )

    async def _extend_remote(self, overrides: tuple[Override, ...]) -> tuple[str, ...]:
        targets = [o for o in overrides if self._remote_enabled_for(o)]
        results = await asyncio.gather(
            *(
                self._bounded(
                    lambda o=override: self._remote.apply(
                        o.service_id, o.level, o.total_duration
                    ),
                    operation="renew",
                    service_id=override.service_id,
                )
                for override in targets
            )
        )
        return tuple(o.service_name for o, ok in zip(targets, results) if not ok)

    async def _revert_one(self, override: Override) -> bool:
        default_level = self._catalog.default_level_of(
            override.service_id, self._config.default_revert_level
        )
        ok = await self._bounded(
            lambda: self._remote.revert(override.service_id, default_level),
            operation="revert",
            service_id=override.service_id,
        )
        if ok:
            logger.info(
                "revert_confirmed",
                service_id=override.service_id,
                default_level=default_level.value,
            )
        return ok

    def _spawn_revert(self, override: Override, *, reason: str) -> None:
        if not self._remote_enabled_for(override):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "revert_skipped_no_event_loop",
                override_id=override.id,
                service_id=override.service_id,
                reason=reason,
            )
            return
        task = loop.create_task(self._revert_one(override))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _bounded(
        self,
        call: Callable[[], Awaitable[bool]],
        *,
        operation: str,
        service_id: str,
    ) -> bool:
        """Run a remote call under the configured timeout.

        Any exception or timeout is reported as False.
        """
        log = logger.bind(operation=operation, service_id=service_id)
        try:
            ok = bool(
                await asyncio.wait_for(call(), self._config.remote_timeout_seconds)
            )
        except asyncio.TimeoutError:
            log.warning(
                "remote_call_timed_out",
                timeout_seconds=self._config.remote_timeout_seconds,
            )
            return False
        except Exception as e:
            log.error(
                "remote_call_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        if not ok:
            log.warning("remote_call_rejected")
        return ok

    def _require_session(self, operation: str) -> OperatorSession:
        if self._session is None:
            raise SessionNotActiveError(operation)
        return self._session
