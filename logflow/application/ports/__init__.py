"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports let the override engine be driven by fakes in tests instead of real
timers, storage and network calls.

Available ports:
- ClockProtocol: Current time in epoch milliseconds
- TickerProtocol: Periodic scheduling of the expiry clock
- PersistentKVPort: Shared key-value store with change notification
- PubSubPort: Named broadcast channel
- RemoteApplierPort: Backend log-level apply/revert
- NotificationSurfacePort: Operator-facing alerts
"""

from logflow.application.ports.clock import ClockProtocol
from logflow.application.ports.notification_surface import (
    Notification,
    NotificationSurfacePort,
)
from logflow.application.ports.persistent_kv import ChangeCallback, PersistentKVPort
from logflow.application.ports.pubsub import MessageCallback, PubSubPort
from logflow.application.ports.remote_applier import RemoteApplierPort
from logflow.application.ports.ticker import TickCallback, TickerProtocol

__all__: list[str] = [
    "ChangeCallback",
    "ClockProtocol",
    "MessageCallback",
    "Notification",
    "NotificationSurfacePort",
    "PersistentKVPort",
    "PubSubPort",
    "RemoteApplierPort",
    "TickCallback",
    "TickerProtocol",
]
