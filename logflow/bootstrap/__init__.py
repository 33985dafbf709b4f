"""Bootstrap wiring for LogFlow dependencies."""

from logflow.bootstrap.engine import build_engine, build_remote_applier
from logflow.bootstrap.logging import configure_structlog

__all__ = ["build_engine", "build_remote_applier", "configure_structlog"]
