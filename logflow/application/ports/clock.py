"""Clock Protocol - interface for current-time provisioning.

All engine components that need the current time inject a ClockProtocol
implementation instead of reading the wall clock directly, so tests can
drive expiry with a controllable clock.

Times are integer milliseconds since the Unix epoch, the unit used by the
persisted snapshot.
"""

from abc import ABC, abstractmethod


class ClockProtocol(ABC):
    """Abstract interface for the engine clock.

    Example usage:
        class MyService:
            def __init__(self, clock: ClockProtocol) -> None:
                self._clock = clock

            def process(self) -> None:
                now = self._clock.now_ms()  # NOT time.time()

    For production:
        Use SystemClock from logflow/infrastructure/adapters/

    For testing:
        Use FakeClock from tests/helpers/fake_clock.py
    """

    @abstractmethod
    def now_ms(self) -> int:
        """Return the current time in epoch milliseconds."""
        ...
