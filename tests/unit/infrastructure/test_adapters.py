"""Unit tests for the small adapters and stubs."""

import time

import pytest
from structlog.testing import capture_logs

from logflow.application.ports.notification_surface import Notification
from logflow.domain.models.log_level import LogLevel
from logflow.infrastructure.adapters.demo_remote_applier import DemoRemoteApplier
from logflow.infrastructure.adapters.logging_notification_surface import (
    LoggingNotificationSurface,
)
from logflow.infrastructure.adapters.system_clock import SystemClock
from logflow.infrastructure.stubs.notification_surface_stub import (
    NotificationPermissionDenied,
    NotificationSurfaceStub,
)
from logflow.infrastructure.stubs.remote_applier_stub import RemoteApplierStub

ALERT = Notification(title="T", body="B", tag="logflow-expiry", require_interaction=True)


class TestSystemClock:
    def test_now_ms_tracks_wall_clock(self) -> None:
        before = int(time.time() * 1000)
        now = SystemClock().now_ms()
        after = int(time.time() * 1000)

        assert before - 1 <= now <= after + 1


class TestDemoRemoteApplier:
    """Tests for the offline applier."""

    @pytest.mark.asyncio
    async def test_always_succeeds(self) -> None:
        applier = DemoRemoteApplier(latency_seconds=0)

        assert await applier.apply("order-api", LogLevel.DEBUG, 1_000) is True
        assert await applier.revert("order-api", LogLevel.ERROR) is True


class TestLoggingNotificationSurface:
    def test_logs_alert(self) -> None:
        with capture_logs() as logs:
            LoggingNotificationSurface().notify(ALERT)

        assert logs == [
            {
                "event": "operator_alert",
                "log_level": "warning",
                "title": "T",
                "body": "B",
                "tag": "logflow-expiry",
                "require_interaction": True,
            }
        ]


class TestNotificationSurfaceStub:
    def test_records(self) -> None:
        stub = NotificationSurfaceStub()
        stub.notify(ALERT)

        assert stub.sent == [ALERT]
        assert stub.with_tag("logflow-expiry") == [ALERT]
        stub.clear()
        assert stub.sent == []

    def test_permission_denied(self) -> None:
        with pytest.raises(NotificationPermissionDenied):
            NotificationSurfaceStub(permission_denied=True).notify(ALERT)


class TestRemoteApplierStub:
    """Tests for the configurable remote stub."""

    @pytest.mark.asyncio
    async def test_records_and_scripts_outcomes(self) -> None:
        stub = RemoteApplierStub(rejecting={"b"}, raising={"c"})

        assert await stub.apply("a", LogLevel.DEBUG, 10) is True
        assert await stub.revert("b", LogLevel.ERROR) is False
        with pytest.raises(RuntimeError):
            await stub.apply("c", LogLevel.DEBUG, 10)

        assert [c.operation for c in stub.calls] == ["apply", "revert", "apply"]
        assert stub.calls_for("revert")[0].duration_ms is None
