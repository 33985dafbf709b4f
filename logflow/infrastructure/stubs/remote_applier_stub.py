"""Remote applier stub adapter.

In-memory implementation of RemoteApplierPort for testing. Records every
call and lets tests choose per-service outcomes: reject, raise or stall.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from logflow.application.ports.remote_applier import RemoteApplierPort
from logflow.domain.models.log_level import LogLevel


@dataclass(frozen=True)
class RemoteCall:
    """One recorded call to the stub."""

    operation: str
    service_id: str
    level: LogLevel
    duration_ms: int | None = None


@dataclass
class RemoteApplierStub(RemoteApplierPort):
    """Configurable remote applier.

    Attributes:
        rejecting: Service ids whose calls return False.
        raising: Service ids whose calls raise RuntimeError.
        stalling: Service ids whose calls sleep for ``stall_seconds`` first.
        calls: Every call received, in order.
    """

    rejecting: set[str] = field(default_factory=set)
    raising: set[str] = field(default_factory=set)
    stalling: set[str] = field(default_factory=set)
    stall_seconds: float = 60.0
    calls: list[RemoteCall] = field(default_factory=list)

    async def apply(self, service_id: str, level: LogLevel, duration_ms: int) -> bool:
        self.calls.append(RemoteCall("apply", service_id, level, duration_ms))
        return await self._outcome(service_id)

    async def revert(self, service_id: str, default_level: LogLevel) -> bool:
        self.calls.append(RemoteCall("revert", service_id, default_level))
        return await self._outcome(service_id)

    async def _outcome(self, service_id: str) -> bool:
        if service_id in self.stalling:
            await asyncio.sleep(self.stall_seconds)
        if service_id in self.raising:
            raise RuntimeError(f"simulated failure for {service_id}")
        return service_id not in self.rejecting

    def calls_for(self, operation: str) -> list[RemoteCall]:
        return [call for call in self.calls if call.operation == operation]

    def clear(self) -> None:
        self.calls.clear()
