"""Broadcast pub/sub port.

Delivery is best-effort and at-least-once with no ordering guarantee
relative to storage change notifications.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

MessageCallback = Callable[[Any], None]


class PubSubPort(Protocol):
    """Port for a named broadcast channel.

    A publisher never receives its own messages.

    Implementations:
    - BroadcastChannelAdapter: In-process channel over a BroadcastHub
    """

    def publish(self, message: dict[str, Any]) -> None:
        """Send ``message`` to every other subscriber on the channel."""
        ...

    def subscribe(self, callback: MessageCallback) -> Callable[[], None]:
        """Register a message handler.

        Returns:
            A function that unregisters the handler.
        """
        ...

    def close(self) -> None:
        """Detach from the channel; further publishes are dropped."""
        ...
