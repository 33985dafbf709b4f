"""Broadcast pulse messages exchanged between tabs.

Messages carry no payload beyond their type: receivers re-derive
everything from the persisted snapshot plus their local clock.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from logflow.domain.errors.sync import SyncMessageError


class SyncMessageType(str, Enum):
    """Kinds of broadcast pulse."""

    SYNC_REQUIRED = "SYNC_REQUIRED"
    """A tab changed the persisted snapshot; peers should re-read it."""

    FORCE_POPUP = "FORCE_POPUP"
    """An override is expiring soon; wake throttled peers to show the prompt."""


@dataclass(frozen=True)
class SyncMessage:
    """A single broadcast pulse."""

    type: SyncMessageType

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def parse(cls, data: Any) -> SyncMessage:
        """Parse a received message.

        Accepts a mapping or its JSON text.

        Raises:
            SyncMessageError: If the message is malformed or of unknown type.
        """
        if isinstance(data, SyncMessage):
            return data
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise SyncMessageError(f"Sync message is not valid JSON: {e}") from e
        if not isinstance(data, dict) or "type" not in data:
            raise SyncMessageError(f"Sync message has no type: {data!r}")
        try:
            return cls(type=SyncMessageType(data["type"]))
        except ValueError:
            raise SyncMessageError(
                f"Unknown sync message type: {data['type']!r}"
            ) from None


SYNC_REQUIRED = SyncMessage(SyncMessageType.SYNC_REQUIRED)
FORCE_POPUP = SyncMessage(SyncMessageType.FORCE_POPUP)
