"""Log severity levels an override can target."""

from __future__ import annotations

from enum import Enum

_ORDER: tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR")


class LogLevel(str, Enum):
    """Ordered log severity, least to most severe.

    Comparison operators follow severity rather than string order, so
    ``LogLevel.DEBUG < LogLevel.WARN`` holds.
    """

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def severity(self) -> int:
        """Position of this level in the severity ordering (TRACE == 0)."""
        return _ORDER.index(self.value)

    @classmethod
    def parse(cls, value: str | LogLevel) -> LogLevel:
        """Parse a level name case-insensitively.

        ``WARNING`` is accepted as an alias for ``WARN``.

        Raises:
            ValueError: If the name is not a known level.
        """
        if isinstance(value, LogLevel):
            return value
        name = str(value).strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown log level: {value!r}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity >= other.severity
