"""Observability infrastructure for structured logging.

This module provides cross-cutting observability concerns:
- Structured JSON logging with structlog
- Tab identity stamped on every log entry

Usage:
    from logflow.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from logflow.application.observability.tab_context import (
    get_tab_id,
    set_tab_id,
    tab_id_processor,
    tab_scope,
)
from logflow.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
    "get_tab_id",
    "set_tab_id",
    "tab_id_processor",
    "tab_scope",
]
