"""Tab identity for log correlation.

Several engines (one per tab) can share a process and call into each
other through the shared storage and broadcast hub. The current tab id is
kept in a context variable so every log entry names the tab that
produced it, even when the call arrived from a peer.

Usage:
    with tab_scope(engine.tab_id):
        engine.tick()

    # In structlog configuration
    processors = [..., tab_id_processor, ...]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Default is empty string to avoid None type issues
_tab_id: ContextVar[str] = ContextVar("tab_id", default="")


def generate_tab_id() -> str:
    """Generate a short random tab id."""
    return uuid4().hex[:8]


def get_tab_id() -> str:
    """Get the current tab id, or empty string if none is set."""
    return _tab_id.get()


def set_tab_id(tab_id: str) -> None:
    """Set the tab id for the current context."""
    _tab_id.set(tab_id)


@contextmanager
def tab_scope(tab_id: str) -> Iterator[None]:
    """Run the enclosed block with ``tab_id`` as the current tab."""
    token = _tab_id.set(tab_id)
    try:
        yield
    finally:
        _tab_id.reset(token)


def tab_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to add tab_id to every log entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with tab_id added.
    """
    tab_id = get_tab_id()
    if tab_id:
        event_dict.setdefault("tab_id", tab_id)
    return event_dict
