"""In-process named broadcast channels.

A BroadcastHub routes messages between BroadcastChannelAdapter instances
opened on the same channel name. A message reaches every other open
adapter on that name; the publisher never receives its own message.
Messages are copied on delivery so receivers cannot mutate each other's
view of a message.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from structlog import get_logger

from logflow.application.ports.pubsub import MessageCallback, PubSubPort

logger = get_logger()


class BroadcastHub:
    """Routes messages between channels of the same name."""

    def __init__(self) -> None:
        self._channels: dict[str, list[BroadcastChannelAdapter]] = {}

    def open(self, name: str) -> BroadcastChannelAdapter:
        channel = BroadcastChannelAdapter(self, name)
        self._channels.setdefault(name, []).append(channel)
        return channel

    def members(self, name: str) -> int:
        return len(self._channels.get(name, []))

    def _detach(self, channel: BroadcastChannelAdapter) -> None:
        members = self._channels.get(channel.name, [])
        if channel in members:
            members.remove(channel)

    def _route(self, sender: BroadcastChannelAdapter, message: dict[str, Any]) -> None:
        for channel in list(self._channels.get(sender.name, [])):
            if channel is not sender:
                channel._deliver(dict(message))


class BroadcastChannelAdapter(PubSubPort):
    """One tab's membership in a named channel."""

    def __init__(self, hub: BroadcastHub, name: str) -> None:
        self._hub = hub
        self.name = name
        self._handlers: list[MessageCallback] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, message: dict[str, Any]) -> None:
        if self._closed:
            logger.debug("broadcast_dropped_closed", channel=self.name)
            return
        self._hub._route(self, message)

    def subscribe(self, callback: MessageCallback) -> Callable[[], None]:
        self._handlers.append(callback)

        def unsubscribe() -> None:
            if callback in self._handlers:
                self._handlers.remove(callback)

        return unsubscribe

    def close(self) -> None:
        self._closed = True
        self._handlers.clear()
        self._hub._detach(self)

    def _deliver(self, message: dict[str, Any]) -> None:
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception as e:
                logger.error(
                    "broadcast_handler_failed",
                    channel=self.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
