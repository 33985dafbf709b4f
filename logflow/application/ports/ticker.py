"""Ticker Protocol - periodic scheduling for the expiry clock.

The production implementation runs the callback on a real periodic
scheduler; the test double only fires when the test advances it.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

TickCallback = Callable[[], None]


class TickerProtocol(ABC):
    """Abstract interface for a periodic tick source.

    Implementations MUST NOT let a failing callback stop the schedule.
    """

    @abstractmethod
    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        """Begin invoking ``callback`` every ``interval_seconds``.

        Calling start while already running replaces the callback and
        interval.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop invoking the callback. Idempotent."""
        ...

    @property
    @abstractmethod
    def running(self) -> bool:
        """Whether the ticker is currently scheduled."""
        ...
