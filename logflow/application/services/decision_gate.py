"""Decision Gate - the keep-vs-accept-reset prompt.

States:
- IDLE: nothing is expiring soon; no prompt
- PENDING: at least one override is expiring soon; the prompt lists
  every currently expiring override

The gate never caches the expiring set. Both resolutions read the store's
expiring set recomputed against the clock at resolution time, minus any
override already past expiry. An override that starts expiring while the
prompt is open is included if it is in the set when the operator decides,
and one that joins afterwards starts a new PENDING cycle.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from structlog import get_logger

from logflow.application.services.override_store import OverrideStore
from logflow.domain.models.override import Override

logger = get_logger()

# Extends renewed overrides on the backend; returns names that failed
RemoteRenewer = Callable[[tuple[Override, ...]], Awaitable[tuple[str, ...]]]
ResolutionListener = Callable[["DecisionOutcome"], None]


class GateState(str, Enum):
    """Whether a decision is outstanding."""

    IDLE = "idle"
    PENDING = "pending"


class Resolution(str, Enum):
    """How the operator resolved a pending decision."""

    KEEP = "keep"
    ACCEPT = "accept"


@dataclass(frozen=True)
class DecisionOutcome:
    """Result of resolving the gate.

    Attributes:
        resolution: Keep or accept.
        overrides: The overrides resolved (renewed copies for KEEP, removed
            entries for ACCEPT).
        remote_failed: Service names whose backend extension failed.
            Diagnostic only; always empty for ACCEPT.
    """

    resolution: Resolution
    overrides: tuple[Override, ...]
    remote_failed: tuple[str, ...] = ()


async def _no_remote(_overrides: tuple[Override, ...]) -> tuple[str, ...]:
    return ()


class DecisionGate:
    """Presents and resolves the decision for the whole expiring set."""

    def __init__(
        self,
        store: OverrideStore,
        remote_renewer: RemoteRenewer | None = None,
    ) -> None:
        self._store = store
        self._remote_renewer = remote_renewer or _no_remote
        self._listeners: list[ResolutionListener] = []
        self._last_state = GateState.IDLE
        self._cycles = 0

    @property
    def state(self) -> GateState:
        return GateState.PENDING if self._store.expiring() else GateState.IDLE

    @property
    def cycles(self) -> int:
        """Number of IDLE -> PENDING transitions observed by evaluate()."""
        return self._cycles

    def prompt(self) -> tuple[Override, ...]:
        """The overrides the prompt should list right now."""
        return self._store.expiring()

    def add_listener(self, listener: ResolutionListener) -> None:
        """Register a callback run right after a local resolution."""
        self._listeners.append(listener)

    def evaluate(self) -> GateState:
        """Re-derive the state and record a transition if one happened."""
        state = self.state
        if state is not self._last_state:
            if state is GateState.PENDING:
                self._cycles += 1
                logger.info(
                    "decision_pending",
                    override_ids=[o.id for o in self._store.expiring()],
                )
            else:
                logger.info("decision_cleared")
            self._last_state = state
        return state

    async def keep_all(self) -> DecisionOutcome:
        """Renew every override in the live expiring set.

        Local renewal happens first and unconditionally; the backend is
        then asked to extend each renewed override. Backend failures are
        reported in the outcome and never undo the renewal.
        """
        ids = [o.id for o in self._store.expiring()]
        renewed = tuple(self._store.renew(ids))
        outcome = DecisionOutcome(Resolution.KEEP, renewed)
        self._resolved(outcome)

        if not renewed:
            return outcome
        failed = await self._remote_renewer(renewed)
        if failed:
            logger.warning("renew_remote_failed", services=list(failed))
        return DecisionOutcome(Resolution.KEEP, renewed, tuple(failed))

    def accept_all(self) -> DecisionOutcome:
        """Remove every override in the live expiring set.

        No revert is sent: the backend's own expiry is trusted to reset
        the level.
        """
        ids = {o.id for o in self._store.expiring()}
        removed = tuple(self._store.remove(lambda o: o.id in ids))
        outcome = DecisionOutcome(Resolution.ACCEPT, removed)
        self._resolved(outcome)
        return outcome

    def _resolved(self, outcome: DecisionOutcome) -> None:
        logger.info(
            "decision_resolved",
            resolution=outcome.resolution.value,
            override_ids=[o.id for o in outcome.overrides],
        )
        for listener in self._listeners:
            listener(outcome)
        self.evaluate()
