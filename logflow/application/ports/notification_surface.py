"""Notification surface port - operator-facing alerts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Notification:
    """An alert shown to the operator.

    Attributes:
        title: Short headline.
        body: Detail line.
        tag: Stable per alert category so the host can coalesce duplicates.
        require_interaction: Keep the alert visible until dismissed.
    """

    title: str
    body: str
    tag: str
    require_interaction: bool = False


class NotificationSurfacePort(Protocol):
    """Port for displaying alerts.

    Display is fire-and-forget. Implementations may raise (for example
    when permission was not granted); callers swallow and log.

    Implementations:
    - NotificationSurfaceStub: Records notifications for testing
    - LoggingNotificationSurface: Writes alerts to the structured log
    """

    def notify(self, notification: Notification) -> None:
        """Display ``notification``."""
        ...
