"""Demo/offline remote applier.

Used when no backend is reachable: every apply and revert succeeds after
an optional simulated latency, and nothing leaves the process.
"""

from __future__ import annotations

import asyncio

from structlog import get_logger

from logflow.application.ports.remote_applier import RemoteApplierPort
from logflow.domain.models.log_level import LogLevel

logger = get_logger()


class DemoRemoteApplier(RemoteApplierPort):
    """Always-successful, local-only applier."""

    def __init__(self, latency_seconds: float = 0.3) -> None:
        self._latency = max(0.0, latency_seconds)

    async def apply(self, service_id: str, level: LogLevel, duration_ms: int) -> bool:
        if self._latency:
            await asyncio.sleep(self._latency)
        logger.debug(
            "demo_apply",
            service_id=service_id,
            level=level.value,
            duration_ms=duration_ms,
        )
        return True

    async def revert(self, service_id: str, default_level: LogLevel) -> bool:
        if self._latency:
            await asyncio.sleep(self._latency)
        logger.debug("demo_revert", service_id=service_id, default_level=default_level.value)
        return True
