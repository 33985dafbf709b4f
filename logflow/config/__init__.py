"""Configuration module for LogFlow.

Available Configurations:
- EngineConfig: Expiry threshold, tick cadence, remote timeout and sync names
"""

from logflow.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    DURATION_OPTIONS,
    TEST_ENGINE_CONFIG,
    DurationOption,
    EngineConfig,
)

__all__ = [
    "DEFAULT_ENGINE_CONFIG",
    "DURATION_OPTIONS",
    "DurationOption",
    "EngineConfig",
    "TEST_ENGINE_CONFIG",
]
