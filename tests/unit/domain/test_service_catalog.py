"""Unit tests for the service catalog."""

from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.service import DEMO_SERVICES, Service, ServiceCatalog


class TestServiceCatalog:
    """Tests for ServiceCatalog lookups."""

    def test_name_of_known_service(self) -> None:
        catalog = ServiceCatalog(DEMO_SERVICES)
        assert catalog.name_of("payment-gw") == "Payment Gateway"

    def test_name_of_unknown_falls_back_to_id(self) -> None:
        assert ServiceCatalog().name_of("ghost") == "ghost"

    def test_default_level(self) -> None:
        catalog = ServiceCatalog([Service("search-idx", "Search Indexer", LogLevel.WARN)])

        assert catalog.default_level_of("search-idx", LogLevel.ERROR) is LogLevel.WARN
        assert catalog.default_level_of("ghost", LogLevel.ERROR) is LogLevel.ERROR

    def test_container_protocol(self) -> None:
        catalog = ServiceCatalog(DEMO_SERVICES)

        assert "order-api" in catalog
        assert "ghost" not in catalog
        assert len(catalog) == len(DEMO_SERVICES)
        assert [s.id for s in catalog][0] == DEMO_SERVICES[0].id
