"""Override engine configuration.

This module defines configuration for the override lifecycle engine with
environment variable overrides for deployment tuning.

Environment Variables:
- LOGFLOW_EXPIRY_WARNING_MS: Expiring-soon threshold (default: 60000, min: 1000, max: 600000)
- LOGFLOW_TICK_INTERVAL_MS: Expiry clock period (default: 1000, min: 100, max: 10000)
- LOGFLOW_REMOTE_TIMEOUT_SECONDS: Remote apply/revert timeout (default: 10, min: 1, max: 120)
- LOGFLOW_STORAGE_KEY: Persisted snapshot key (default: logflow_active_overrides)
- LOGFLOW_CHANNEL_NAME: Broadcast channel name (default: logflow_sync_channel)
- LOGFLOW_DEFAULT_REVERT_LEVEL: Level used when a service's default is unknown (default: ERROR)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.override import EXPIRY_WARNING_THRESHOLD_MS


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


# =============================================================================
# Expiry Configuration
# =============================================================================

DEFAULT_EXPIRY_WARNING_MS = EXPIRY_WARNING_THRESHOLD_MS
MIN_EXPIRY_WARNING_MS = 1_000
MAX_EXPIRY_WARNING_MS = 600_000

DEFAULT_TICK_INTERVAL_MS = 1_000
MIN_TICK_INTERVAL_MS = 100
MAX_TICK_INTERVAL_MS = 10_000

# =============================================================================
# Remote Applier Configuration
# =============================================================================

DEFAULT_REMOTE_TIMEOUT_SECONDS = 10
MIN_REMOTE_TIMEOUT_SECONDS = 1
MAX_REMOTE_TIMEOUT_SECONDS = 120

# =============================================================================
# Cross-Tab Sync Configuration
# =============================================================================

DEFAULT_STORAGE_KEY = "logflow_active_overrides"
DEFAULT_CHANNEL_NAME = "logflow_sync_channel"
DEFAULT_REVERT_LEVEL = LogLevel.ERROR


@dataclass(frozen=True)
class DurationOption:
    """A preset override duration offered to the operator."""

    label: str
    value_ms: int


DURATION_OPTIONS: tuple[DurationOption, ...] = (
    DurationOption("2m", 2 * 60 * 1000),
    DurationOption("10m", 10 * 60 * 1000),
    DurationOption("30m", 30 * 60 * 1000),
    DurationOption("1h", 60 * 60 * 1000),
    DurationOption("4h", 4 * 60 * 60 * 1000),
)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the override lifecycle engine.

    Attributes:
        expiry_warning_ms: Remaining lifetime below which an override is
            expiring soon. Default: 60000.
        tick_interval_ms: Expiry clock period. Default: 1000.
        remote_timeout_seconds: Upper bound on any remote apply/revert;
            a timeout counts as failure. Default: 10.
        storage_key: Key of the persisted snapshot.
        channel_name: Name of the broadcast channel.
        default_revert_level: Level passed to revert when the catalog does
            not know the service's default.
    """

    expiry_warning_ms: int = DEFAULT_EXPIRY_WARNING_MS
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    remote_timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT_SECONDS
    storage_key: str = DEFAULT_STORAGE_KEY
    channel_name: str = DEFAULT_CHANNEL_NAME
    default_revert_level: LogLevel = DEFAULT_REVERT_LEVEL

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not MIN_EXPIRY_WARNING_MS <= self.expiry_warning_ms <= MAX_EXPIRY_WARNING_MS:
            raise ValueError(
                f"expiry_warning_ms must be between {MIN_EXPIRY_WARNING_MS} "
                f"and {MAX_EXPIRY_WARNING_MS}, got {self.expiry_warning_ms}"
            )
        if not MIN_TICK_INTERVAL_MS <= self.tick_interval_ms <= MAX_TICK_INTERVAL_MS:
            raise ValueError(
                f"tick_interval_ms must be between {MIN_TICK_INTERVAL_MS} "
                f"and {MAX_TICK_INTERVAL_MS}, got {self.tick_interval_ms}"
            )
        if self.remote_timeout_seconds <= 0:
            raise ValueError(
                f"remote_timeout_seconds must be positive, got {self.remote_timeout_seconds}"
            )
        if not self.storage_key:
            raise ValueError("storage_key must be non-empty")
        if not self.channel_name:
            raise ValueError("channel_name must be non-empty")

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000

    @classmethod
    def from_environment(cls) -> EngineConfig:
        """Create config from environment variables with defaults.

        Numeric values are clamped to their valid range; an unknown
        revert level falls back to ERROR.

        Returns:
            EngineConfig with values from environment or defaults.
        """
        warning = _clamp(
            _get_int_env("LOGFLOW_EXPIRY_WARNING_MS", DEFAULT_EXPIRY_WARNING_MS),
            MIN_EXPIRY_WARNING_MS,
            MAX_EXPIRY_WARNING_MS,
        )
        tick = _clamp(
            _get_int_env("LOGFLOW_TICK_INTERVAL_MS", DEFAULT_TICK_INTERVAL_MS),
            MIN_TICK_INTERVAL_MS,
            MAX_TICK_INTERVAL_MS,
        )
        timeout = _clamp(
            _get_int_env("LOGFLOW_REMOTE_TIMEOUT_SECONDS", DEFAULT_REMOTE_TIMEOUT_SECONDS),
            MIN_REMOTE_TIMEOUT_SECONDS,
            MAX_REMOTE_TIMEOUT_SECONDS,
        )

        try:
            revert_level = LogLevel.parse(
                os.environ.get("LOGFLOW_DEFAULT_REVERT_LEVEL", DEFAULT_REVERT_LEVEL.value)
            )
        except ValueError:
            revert_level = DEFAULT_REVERT_LEVEL

        return cls(
            expiry_warning_ms=warning,
            tick_interval_ms=tick,
            remote_timeout_seconds=timeout,
            storage_key=os.environ.get("LOGFLOW_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
            channel_name=os.environ.get("LOGFLOW_CHANNEL_NAME") or DEFAULT_CHANNEL_NAME,
            default_revert_level=revert_level,
        )


# Default production config
DEFAULT_ENGINE_CONFIG = EngineConfig()

# Testing config with a short remote timeout
TEST_ENGINE_CONFIG = EngineConfig(remote_timeout_seconds=0.5)
