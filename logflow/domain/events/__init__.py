"""Domain events emitted by the override engine."""

from logflow.domain.events.override_event import ApplyResult, TickResult
from logflow.domain.events.sync_message import SyncMessage, SyncMessageType

__all__: list[str] = ["ApplyResult", "SyncMessage", "SyncMessageType", "TickResult"]
