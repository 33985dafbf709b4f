"""Infrastructure adapters for LogFlow.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external services.
"""

from logflow.infrastructure.adapters.asyncio_ticker import AsyncioTicker
from logflow.infrastructure.adapters.broadcast_channel import (
    BroadcastChannelAdapter,
    BroadcastHub,
)
from logflow.infrastructure.adapters.demo_remote_applier import DemoRemoteApplier
from logflow.infrastructure.adapters.http_remote_applier import HttpRemoteApplier
from logflow.infrastructure.adapters.logging_notification_surface import (
    LoggingNotificationSurface,
)
from logflow.infrastructure.adapters.shared_storage import SharedStorage, StorageView
from logflow.infrastructure.adapters.system_clock import SystemClock

__all__: list[str] = [
    "AsyncioTicker",
    "BroadcastChannelAdapter",
    "BroadcastHub",
    "DemoRemoteApplier",
    "HttpRemoteApplier",
    "LoggingNotificationSurface",
    "SharedStorage",
    "StorageView",
    "SystemClock",
]
