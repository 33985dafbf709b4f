"""Notification Dispatcher - de-duplicated operator alerts.

Rules:
1. An override entering the expiring set fires a warning once; its id is
   remembered until it leaves the set.
2. An override leaving the expiring set (renewed, removed, expired) is
   forgotten, so a later crossing alerts again.
3. Expiry fires a distinct "reverted" alert that is not gated by the
   remembered set: expiry is terminal for an id.

Alerts are batched per tick and are fire-and-forget. A surface failure
(for example permission not granted) is logged and never blocks a state
transition.
"""

from __future__ import annotations

from collections.abc import Iterable

from structlog import get_logger

from logflow.application.ports.notification_surface import (
    Notification,
    NotificationSurfacePort,
)
from logflow.domain.events.override_event import TickResult
from logflow.domain.models.override import Override

logger = get_logger()

EXPIRY_TAG = "logflow-expiry"
AUTORESET_TAG = "logflow-autoreset"


def expiry_warning(overrides: Iterable[Override]) -> Notification:
    names = ", ".join(o.service_name for o in overrides)
    return Notification(
        title="Tracker Alert: Expiry Imminent",
        body=f"Overrides expiring in <1m: {names}",
        tag=EXPIRY_TAG,
        require_interaction=True,
    )


def auto_reset(overrides: Iterable[Override]) -> Notification:
    names = ", ".join(o.service_name for o in overrides)
    return Notification(
        title="System Auto-Reset Implemented",
        body=f"Timeout reached: {names} have reverted to default safe configuration.",
        tag=AUTORESET_TAG,
    )


class NotificationDispatcher:
    """Fires at most one alert per crossing event.

    Attributes:
        _surface: Where alerts are displayed.
        _notified: Ids already warned about in their current expiring window.
    """

    def __init__(self, surface: NotificationSurfacePort) -> None:
        self._surface = surface
        self._notified: set[str] = set()

    @property
    def notified_ids(self) -> frozenset[str]:
        return frozenset(self._notified)

    def observe(self, result: TickResult) -> list[Notification]:
        """Inspect a tick outcome and fire the alerts it calls for.

        Returns:
            The notifications that were attempted, in firing order.
        """
        attempted: list[Notification] = []

        if result.expired:
            attempted.append(auto_reset(result.expired))
            self._send(attempted[-1])
            self._notified.difference_update(o.id for o in result.expired)

        needs_warning = [o for o in result.expiring if o.id not in self._notified]
        if needs_warning:
            attempted.append(expiry_warning(needs_warning))
            self._send(attempted[-1])
            self._notified.update(o.id for o in needs_warning)

        self._notified.intersection_update(result.expiring_ids)
        return attempted

    def forget(self, ids: Iterable[str]) -> None:
        """Drop ids that left the expiring set outside a tick."""
        self._notified.difference_update(ids)

    def reset(self) -> None:
        self._notified.clear()

    def _send(self, notification: Notification) -> bool:
        try:
            self._surface.notify(notification)
        except Exception as e:
            logger.warning(
                "notification_failed",
                tag=notification.tag,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        logger.debug("notification_sent", tag=notification.tag, title=notification.title)
        return True
