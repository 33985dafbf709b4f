"""FakeClock - Controllable clock for deterministic tests.

Time-dependent tests must never read the wall clock. Inject a FakeClock
wherever a ClockProtocol is expected and move time explicitly:

    >>> clock = FakeClock()
    >>> t0 = clock.now_ms()
    >>> clock.advance(60_001)
    >>> clock.now_ms() - t0
    60001
"""

from __future__ import annotations

from logflow.application.ports.clock import ClockProtocol

# 2026-01-01T00:00:00Z
DEFAULT_START_MS = 1_767_225_600_000


class FakeClock(ClockProtocol):
    """Millisecond clock that only moves when told to.

    Attributes:
        _now: The controlled current time, epoch milliseconds.
    """

    def __init__(self, start_ms: int = DEFAULT_START_MS) -> None:
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> None:
        """Move time forward by ``ms`` milliseconds.

        Raises:
            ValueError: If ms is negative. Use set() to move backwards.
        """
        if ms < 0:
            raise ValueError(f"Cannot advance time backwards. Got {ms} ms.")
        self._now += ms

    def set(self, now_ms: int) -> None:
        """Jump to an absolute time, in either direction."""
        self._now = now_ms
