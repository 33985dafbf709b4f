"""Application services for the override lifecycle.

Dependency order (leaves first): OverrideStore -> ExpiryClock ->
SyncChannel -> NotificationDispatcher -> DecisionGate -> OverrideEngine.
"""

from logflow.application.services.decision_gate import DecisionGate, GateState
from logflow.application.services.expiry_clock import ExpiryClock
from logflow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from logflow.application.services.override_engine import (
    OperatorSession,
    OverrideEngine,
)
from logflow.application.services.override_store import OverrideStore
from logflow.application.services.sync_channel import SyncChannel

__all__: list[str] = [
    "DecisionGate",
    "ExpiryClock",
    "GateState",
    "NotificationDispatcher",
    "OperatorSession",
    "OverrideEngine",
    "OverrideStore",
    "SyncChannel",
]
