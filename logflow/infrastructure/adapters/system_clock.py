"""Wall-clock implementation of ClockProtocol."""

import time

from logflow.application.ports.clock import ClockProtocol


class SystemClock(ClockProtocol):
    """Reads the system clock in epoch milliseconds."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000
