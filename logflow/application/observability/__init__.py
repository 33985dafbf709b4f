"""Application-level observability utilities."""

from logflow.application.observability.tab_context import (
    generate_tab_id,
    get_tab_id,
    set_tab_id,
    tab_id_processor,
    tab_scope,
)

__all__ = [
    "generate_tab_id",
    "get_tab_id",
    "set_tab_id",
    "tab_id_processor",
    "tab_scope",
]
