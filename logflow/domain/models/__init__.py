"""Domain models for LogFlow."""

from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.override import (
    EXPIRY_WARNING_THRESHOLD_MS,
    Override,
    Urgency,
)
from logflow.domain.models.service import DEMO_SERVICES, Service, ServiceCatalog

__all__: list[str] = [
    "DEMO_SERVICES",
    "EXPIRY_WARNING_THRESHOLD_MS",
    "LogLevel",
    "Override",
    "Service",
    "ServiceCatalog",
    "Urgency",
]
