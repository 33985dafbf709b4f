"""Remote applier port - the backend-facing log level contract.

The engine consumes this port but never waits on it before changing
local state. Both calls are best-effort: implementations return False on
failure rather than raising, and the engine additionally treats any
exception or timeout as False.
"""

from __future__ import annotations

from typing import Protocol

from logflow.domain.models.log_level import LogLevel


class RemoteApplierPort(Protocol):
    """Port for changing a service's log level on the backend.

    Implementations:
    - HttpRemoteApplier: Management logger HTTP API
    - DemoRemoteApplier: Offline mode, always succeeds
    - RemoteApplierStub: Configurable outcomes for testing
    """

    async def apply(self, service_id: str, level: LogLevel, duration_ms: int) -> bool:
        """Elevate ``service_id`` to ``level`` for ``duration_ms``.

        Returns:
            True if the backend accepted the change. On False the engine
            does not record a local override for the service.
        """
        ...

    async def revert(self, service_id: str, default_level: LogLevel) -> bool:
        """Return ``service_id`` to ``default_level``.

        Returns:
            True if the backend accepted the change. Observed for
            diagnostics only; never re-creates the override.
        """
        ...
