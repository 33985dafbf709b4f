"""Notification surface stub adapter.

Records alerts instead of displaying them. Setting ``permission_denied``
makes every call raise, the way a host without notification permission
would.
"""

from __future__ import annotations

from logflow.application.ports.notification_surface import (
    Notification,
    NotificationSurfacePort,
)


class NotificationPermissionDenied(RuntimeError):
    """Raised by the stub when notifications are not permitted."""


class NotificationSurfaceStub(NotificationSurfacePort):
    """In-memory notification surface for testing."""

    def __init__(self, permission_denied: bool = False) -> None:
        self.permission_denied = permission_denied
        self.sent: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        if self.permission_denied:
            raise NotificationPermissionDenied("notification permission not granted")
        self.sent.append(notification)

    def with_tag(self, tag: str) -> list[Notification]:
        return [n for n in self.sent if n.tag == tag]

    def clear(self) -> None:
        self.sent.clear()
