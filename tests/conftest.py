"""
Pytest configuration and shared fixtures for LogFlow tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Time never comes from the wall clock: use FakeClock
- Ticks never come from a real scheduler: use ManualTicker
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Callable

import pytest

from logflow.application.services.override_engine import OperatorSession, OverrideEngine
from logflow.application.services.override_store import OverrideStore
from logflow.config.engine_config import TEST_ENGINE_CONFIG, EngineConfig
from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.override import Override
from logflow.domain.models.service import DEMO_SERVICES, ServiceCatalog
from logflow.infrastructure.adapters.broadcast_channel import BroadcastHub
from logflow.infrastructure.adapters.shared_storage import SharedStorage
from logflow.infrastructure.stubs.notification_surface_stub import NotificationSurfaceStub
from logflow.infrastructure.stubs.remote_applier_stub import RemoteApplierStub
from tests.helpers import FakeClock, ManualTicker

ENV = "prod"
ONE_MINUTE_MS = 60_000
TWO_MINUTES_MS = 2 * ONE_MINUTE_MS


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a FakeClock at a fixed start time."""
    return FakeClock()


@pytest.fixture
def store(fake_clock: FakeClock) -> OverrideStore:
    """Provide an empty OverrideStore on the fake clock."""
    return OverrideStore(fake_clock)


@pytest.fixture
def catalog() -> ServiceCatalog:
    """Provide the demo service catalog."""
    return ServiceCatalog(DEMO_SERVICES)


@pytest.fixture
def make_override(fake_clock: FakeClock) -> Callable[..., Override]:
    """Build overrides starting at the fake clock's current time."""

    def _make(
        service_id: str = "order-api",
        *,
        env_id: str = ENV,
        level: LogLevel = LogLevel.DEBUG,
        duration_ms: int = TWO_MINUTES_MS,
        service_name: str = "",
    ) -> Override:
        return Override.create(
            service_id=service_id,
            service_name=service_name or service_id,
            env_id=env_id,
            level=level,
            duration_ms=duration_ms,
            now=fake_clock.now_ms(),
        )

    return _make


@pytest.fixture
def shared_storage() -> SharedStorage:
    """Provide storage shared by every tab in a test."""
    return SharedStorage()


@pytest.fixture
def broadcast_hub() -> BroadcastHub:
    """Provide a broadcast hub shared by every tab in a test."""
    return BroadcastHub()


@pytest.fixture
def remote() -> RemoteApplierStub:
    """Provide a remote applier stub that accepts everything by default."""
    return RemoteApplierStub()


@pytest.fixture
def notifier() -> NotificationSurfaceStub:
    """Provide a recording notification surface."""
    return NotificationSurfaceStub()


@pytest.fixture
def session() -> OperatorSession:
    """Provide a non-demo operator session connected to ENV."""
    return OperatorSession(username="operator", connected_env=ENV)


@pytest.fixture
def make_engine(
    fake_clock: FakeClock,
    shared_storage: SharedStorage,
    broadcast_hub: BroadcastHub,
    catalog: ServiceCatalog,
) -> Callable[..., OverrideEngine]:
    """Build engines (tabs) that share clock, storage and broadcast hub.

    Each call returns a new tab with its own ticker, remote stub and
    notification stub unless given explicitly.
    """

    def _make(
        *,
        remote: RemoteApplierStub | None = None,
        notifier: NotificationSurfaceStub | None = None,
        ticker: ManualTicker | None = None,
        config: EngineConfig = TEST_ENGINE_CONFIG,
        tab_id: str | None = None,
    ) -> OverrideEngine:
        return OverrideEngine(
            clock=fake_clock,
            kv=shared_storage.view(),
            pubsub=broadcast_hub.open(config.channel_name),
            ticker=ticker or ManualTicker(),
            remote_applier=remote or RemoteApplierStub(),
            notifier=notifier or NotificationSurfaceStub(),
            catalog=catalog,
            config=config,
            tab_id=tab_id,
        )

    return _make


@pytest.fixture
def engine(
    make_engine: Callable[..., OverrideEngine],
    remote: RemoteApplierStub,
    notifier: NotificationSurfaceStub,
) -> OverrideEngine:
    """Provide a single, not yet started engine."""
    return make_engine(remote=remote, notifier=notifier, tab_id="tab-a")
