"""In-memory stand-ins for outbound ports, used in tests and local runs."""

from logflow.infrastructure.stubs.notification_surface_stub import (
    NotificationPermissionDenied,
    NotificationSurfaceStub,
)
from logflow.infrastructure.stubs.remote_applier_stub import RemoteApplierStub, RemoteCall

__all__ = [
    "NotificationPermissionDenied",
    "NotificationSurfaceStub",
    "RemoteApplierStub",
    "RemoteCall",
]
