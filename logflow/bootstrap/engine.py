"""Bootstrap wiring for an override engine.

Each tab gets its own engine. Tabs in the same process share one
SharedStorage and one BroadcastHub, which is what makes them peers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlog import get_logger

from logflow.application.services.override_engine import OverrideEngine
from logflow.config.engine_config import EngineConfig
from logflow.domain.models.service import DEMO_SERVICES, ServiceCatalog
from logflow.infrastructure.adapters.asyncio_ticker import AsyncioTicker
from logflow.infrastructure.adapters.demo_remote_applier import DemoRemoteApplier
from logflow.infrastructure.adapters.http_remote_applier import HttpRemoteApplier
from logflow.infrastructure.adapters.logging_notification_surface import (
    LoggingNotificationSurface,
)
from logflow.infrastructure.adapters.system_clock import SystemClock

if TYPE_CHECKING:
    from logflow.application.ports.remote_applier import RemoteApplierPort
    from logflow.infrastructure.adapters.broadcast_channel import BroadcastHub
    from logflow.infrastructure.adapters.shared_storage import SharedStorage

logger = get_logger()


def build_remote_applier(
    api_endpoint: str | None,
    token: str | None,
    config: EngineConfig,
) -> RemoteApplierPort:
    """Pick the backend applier.

    Without an endpoint the demo applier is used.
    """
    if not api_endpoint:
        logger.info("remote_applier_selected", kind="demo")
        return DemoRemoteApplier()
    logger.info("remote_applier_selected", kind="http", endpoint=api_endpoint)
    return HttpRemoteApplier(
        api_endpoint,
        token or "",
        timeout_seconds=config.remote_timeout_seconds,
    )


def build_engine(
    storage: SharedStorage,
    hub: BroadcastHub,
    *,
    api_endpoint: str | None = None,
    token: str | None = None,
    config: EngineConfig | None = None,
    catalog: ServiceCatalog | None = None,
    tab_id: str | None = None,
) -> OverrideEngine:
    """Wire an engine for one tab against shared storage and broadcast.

    Args:
        storage: Storage shared by every tab of the operator.
        hub: Broadcast hub shared by every tab of the operator.
        api_endpoint: Management logger endpoint; None selects demo mode.
        token: Bearer token for the endpoint.
        config: Engine configuration, defaults to the environment.
        catalog: Service catalog, defaults to the demo services.
        tab_id: Log identity for the tab, generated when omitted.

    Returns:
        An engine ready for start().
    """
    config = config or EngineConfig.from_environment()
    return OverrideEngine(
        clock=SystemClock(),
        kv=storage.view(),
        pubsub=hub.open(config.channel_name),
        ticker=AsyncioTicker(),
        remote_applier=build_remote_applier(api_endpoint, token, config),
        notifier=LoggingNotificationSurface(),
        catalog=catalog or ServiceCatalog(DEMO_SERVICES),
        config=config,
        tab_id=tab_id,
    )
