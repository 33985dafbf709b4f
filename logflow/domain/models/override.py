"""Override entity - a time-bounded elevation of a service's log level.

An Override is the only persistent entity in LogFlow. Each tab owns a
local copy of the active set; the persisted snapshot is an advisory
broadcast medium shared between tabs.

Invariants:
- expiry_time > start_time, always
- at most one Override per (service_id, env_id) in a tab's view
- is_expiring_soon is a pure function of (expiry_time, now) and is
  never read from storage
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from uuid import uuid4

from logflow.domain.errors.override import (
    DurationValidationError,
    OverrideValidationError,
)
from logflow.domain.models.log_level import LogLevel

# Remaining lifetime below which an override counts as expiring soon
EXPIRY_WARNING_THRESHOLD_MS: int = 60_000

# Remaining lifetime below which the countdown is shown as a warning
URGENCY_WARNING_MS: int = 180_000


class Urgency(str, Enum):
    """Display urgency of an override's countdown."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Override:
    """An active log level override for one service in one environment.

    Attributes:
        id: Opaque identifier, stable across renewal, new on supersede.
        service_id: Target service; natural key together with env_id.
        service_name: Human-readable service name.
        env_id: Environment the override applies to.
        level: Target severity.
        start_time: Creation time, epoch milliseconds.
        expiry_time: Absolute expiry, epoch milliseconds.
        total_duration: expiry_time - start_time at creation; reused on renewal.
        is_expiring_soon: Derived flag, excluded from equality.
    """

    id: str
    service_id: str
    service_name: str
    env_id: str
    level: LogLevel
    start_time: int
    expiry_time: int
    total_duration: int
    is_expiring_soon: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate entity invariants.

        Raises:
            OverrideValidationError: If an invariant is violated.
        """
        if not self.id:
            raise OverrideValidationError("Override id must be non-empty")
        if not self.service_id or not self.service_id.strip():
            raise OverrideValidationError("Override service_id must be non-empty")
        if not self.env_id or not self.env_id.strip():
            raise OverrideValidationError("Override env_id must be non-empty")
        if self.total_duration <= 0:
            raise DurationValidationError(self.total_duration)
        if self.expiry_time <= self.start_time:
            raise OverrideValidationError(
                f"Override {self.id}: expiry_time ({self.expiry_time}) must be "
                f"after start_time ({self.start_time})"
            )

    @classmethod
    def create(
        cls,
        *,
        service_id: str,
        service_name: str,
        env_id: str,
        level: LogLevel | str,
        duration_ms: int,
        now: int,
        override_id: str | None = None,
    ) -> Override:
        """Create a new override starting at ``now``.

        Args:
            service_id: Target service.
            service_name: Display name; falls back to service_id when empty.
            env_id: Target environment.
            level: Target severity.
            duration_ms: Lifetime in milliseconds, must be positive.
            now: Current time, epoch milliseconds.
            override_id: Explicit id; a fresh one is generated when omitted.

        Raises:
            DurationValidationError: If duration_ms is not positive.
            OverrideValidationError: If any other invariant is violated.
        """
        if duration_ms <= 0:
            raise DurationValidationError(duration_ms)
        return cls(
            id=override_id or uuid4().hex,
            service_id=service_id,
            service_name=service_name or service_id,
            env_id=env_id,
            level=LogLevel.parse(level),
            start_time=now,
            expiry_time=now + duration_ms,
            total_duration=duration_ms,
        )

    @property
    def key(self) -> tuple[str, str]:
        """Natural key: one active override per (service_id, env_id)."""
        return (self.service_id, self.env_id)

    def expiring_soon_at(
        self, now: int, threshold_ms: int = EXPIRY_WARNING_THRESHOLD_MS
    ) -> bool:
        return self.expiry_time - now < threshold_ms

    def is_expired_at(self, now: int) -> bool:
        return self.expiry_time <= now

    def with_derived_state(
        self, now: int, threshold_ms: int = EXPIRY_WARNING_THRESHOLD_MS
    ) -> Override:
        """Return a copy whose is_expiring_soon reflects ``now``."""
        flag = self.expiring_soon_at(now, threshold_ms)
        if flag == self.is_expiring_soon:
            return self
        return replace(self, is_expiring_soon=flag)

    def renewed(self, now: int) -> Override:
        """Return a copy expiring ``total_duration`` after ``now``.

        The new window is measured from ``now``, not from the original
        window's end.
        """
        return replace(
            self,
            expiry_time=now + self.total_duration,
            is_expiring_soon=False,
        )

    def remaining_ms(self, now: int) -> int:
        return max(0, self.expiry_time - now)

    def remaining_fraction(self, now: int) -> float:
        """Fraction of the window still left, clamped to [0, 1]."""
        fraction = self.remaining_ms(now) / self.total_duration
        return min(1.0, max(0.0, fraction))

    def urgency(self, now: int) -> Urgency:
        remaining = self.remaining_ms(now)
        if remaining < EXPIRY_WARNING_THRESHOLD_MS:
            return Urgency.CRITICAL
        if remaining < URGENCY_WARNING_MS:
            return Urgency.WARNING
        return Urgency.NORMAL
