"""Notification surface that writes alerts to the structured log.

Stands in for desktop notifications on headless hosts.
"""

from structlog import get_logger

from logflow.application.ports.notification_surface import (
    Notification,
    NotificationSurfacePort,
)

logger = get_logger()


class LoggingNotificationSurface(NotificationSurfacePort):
    """Logs each notification as a warning-level event."""

    def notify(self, notification: Notification) -> None:
        logger.warning(
            "operator_alert",
            title=notification.title,
            body=notification.body,
            tag=notification.tag,
            require_interaction=notification.require_interaction,
        )
