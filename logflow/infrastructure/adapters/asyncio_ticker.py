"""Asyncio-based periodic ticker.

Fires the callback at fixed interval boundaries measured on the event
loop's monotonic clock, so callback execution time does not accumulate
as drift. Missed intervals (a suspended or throttled process) are skipped
rather than replayed: one tick catches the clock up.
"""

from __future__ import annotations

import asyncio

from structlog import get_logger

from logflow.application.ports.ticker import TickCallback, TickerProtocol

logger = get_logger()


class AsyncioTicker(TickerProtocol):
    """Production ticker running on the current asyncio event loop.

    Attributes:
        _task: Background task driving the schedule.
        _skipped: Intervals skipped to catch up after a stall.
    """

    def __init__(self, name: str = "expiry_clock") -> None:
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self._ticks = 0
        self._skipped = 0

    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        """Schedule ``callback`` on the running loop.

        Raises:
            RuntimeError: If called outside a running event loop.
            ValueError: If interval_seconds is not positive.
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        loop = asyncio.get_running_loop()
        self.stop()
        self._task = loop.create_task(self._run(callback, interval_seconds))
        logger.debug("ticker_started", ticker=self._name, interval_seconds=interval_seconds)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("ticker_stopped", ticker=self._name, ticks=self._ticks)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def skipped_count(self) -> int:
        return self._skipped

    async def _run(self, callback: TickCallback, interval: float) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time() + interval

        while True:
            delay = next_run - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)

            try:
                callback()
                self._ticks += 1
            except Exception as e:
                logger.error(
                    "tick_callback_failed",
                    ticker=self._name,
                    error=str(e),
                    error_type=type(e).__name__,
                )

            now = loop.time()
            skipped = 0
            while next_run <= now:
                next_run += interval
                skipped += 1
            if skipped > 1:
                self._skipped += skipped - 1
                logger.warning(
                    "ticker_skipped_intervals",
                    ticker=self._name,
                    skipped=skipped - 1,
                )
