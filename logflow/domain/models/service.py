"""Service catalog entries.

A Service names an override target and carries the level it reverts to
when the override ends.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from logflow.domain.models.log_level import LogLevel


@dataclass(frozen=True)
class Service:
    """A service whose loggers can be overridden.

    Attributes:
        id: Service identifier as known to the backend.
        name: Display name.
        default_level: Level the service runs at without an override.
    """

    id: str
    name: str
    default_level: LogLevel = LogLevel.INFO


class ServiceCatalog:
    """Lookup of known services by id."""

    def __init__(self, services: Iterable[Service] = ()) -> None:
        self._services: dict[str, Service] = {s.id: s for s in services}

    def get(self, service_id: str) -> Service | None:
        return self._services.get(service_id)

    def name_of(self, service_id: str) -> str:
        service = self._services.get(service_id)
        return service.name if service else service_id

    def default_level_of(self, service_id: str, fallback: LogLevel) -> LogLevel:
        service = self._services.get(service_id)
        return service.default_level if service else fallback

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._services

    def __iter__(self) -> Iterator[Service]:
        return iter(self._services.values())

    def __len__(self) -> int:
        return len(self._services)


# Offline catalog used in demo mode
DEMO_SERVICES: tuple[Service, ...] = (
    Service("productorder-returnnotecust-service", "productorder-returnnotecust", LogLevel.ERROR),
    Service("order-api", "Order Processing API", LogLevel.ERROR),
    Service("payment-gw", "Payment Gateway", LogLevel.ERROR),
    Service("inventory-svc", "Inventory Manager", LogLevel.ERROR),
    Service("notif-svc", "Notification Service", LogLevel.ERROR),
    Service("cart-svc", "Shopping Cart Service", LogLevel.ERROR),
    Service("search-idx", "Search Indexer", LogLevel.WARN),
    Service("rec-engine", "Recommendation Engine", LogLevel.INFO),
    Service("shipping-logistics", "Logistics Coordinator", LogLevel.INFO),
    Service("user-profile", "User Profile Service", LogLevel.DEBUG),
    Service("audit-trail", "Audit Logging Service", LogLevel.TRACE),
)
