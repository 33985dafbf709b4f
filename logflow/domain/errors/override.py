"""Override domain errors.

Local invariant violations are rejected before the mutation reaches the
store, so nothing raised from here is ever persisted.
"""

from logflow.domain.exceptions import LogflowError


class OverrideValidationError(LogflowError):
    """Raised when an override violates an entity invariant.

    Raised when:
    - expiry_time is not strictly after start_time
    - service_id or env_id is empty
    - total_duration is not positive
    """

    pass


class DurationValidationError(OverrideValidationError):
    """Raised when a requested override duration is not positive.

    Attributes:
        duration_ms: The rejected duration in milliseconds.
    """

    def __init__(self, duration_ms: int, message: str | None = None) -> None:
        """Initialize with the rejected duration and optional custom message.

        Args:
            duration_ms: The rejected duration in milliseconds.
            message: Optional custom error message.
        """
        msg = message or f"Override duration must be positive (got {duration_ms} ms)"
        super().__init__(msg)
        self.duration_ms = duration_ms
