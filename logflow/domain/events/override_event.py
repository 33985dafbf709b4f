"""Results emitted by override lifecycle operations."""

from __future__ import annotations

from dataclasses import dataclass

from logflow.domain.models.override import Override


@dataclass(frozen=True)
class TickResult:
    """Outcome of one expiry clock tick.

    Attributes:
        now: Clock reading the tick evaluated against (epoch ms).
        expired: Overrides removed by this tick, in store order.
        live: Overrides remaining after the tick, derived flags current.
        expiring: Subset of live that is expiring soon.
    """

    now: int
    expired: tuple[Override, ...]
    live: tuple[Override, ...]
    expiring: tuple[Override, ...]

    @property
    def expiring_ids(self) -> frozenset[str]:
        return frozenset(o.id for o in self.expiring)

    @property
    def attention_required(self) -> bool:
        return bool(self.expiring)


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of a batch apply.

    A failed apply leaves no local override for that service.

    Attributes:
        created: Overrides recorded locally for services that applied.
        failed: Display names of services whose apply failed.
    """

    created: tuple[Override, ...]
    failed: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.failed
