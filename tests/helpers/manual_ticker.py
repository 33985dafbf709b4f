"""ManualTicker - a ticker that fires only when the test calls fire()."""

from __future__ import annotations

from logflow.application.ports.ticker import TickCallback, TickerProtocol


class ManualTicker(TickerProtocol):
    """Records start/stop and lets tests drive ticks explicitly."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self.interval_seconds: float | None = None
        self.start_count = 0

    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        self._callback = callback
        self.interval_seconds = interval_seconds
        self.start_count += 1

    def stop(self) -> None:
        self._callback = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def fire(self, times: int = 1) -> None:
        """Invoke the callback ``times`` times; no-op while stopped."""
        for _ in range(times):
            if self._callback is None:
                return
            self._callback()
