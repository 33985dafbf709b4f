"""Test helpers for LogFlow tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeClock: Controllable millisecond clock for deterministic tests
    ManualTicker: Ticker that only fires when the test says so

Usage:
    from tests.helpers import FakeClock, ManualTicker
"""

from tests.helpers.fake_clock import DEFAULT_START_MS, FakeClock
from tests.helpers.manual_ticker import ManualTicker

__all__ = ["DEFAULT_START_MS", "FakeClock", "ManualTicker"]
