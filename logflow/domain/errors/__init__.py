"""Domain errors for LogFlow.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from LogflowError.
"""

from logflow.domain.errors.override import (
    DurationValidationError,
    OverrideValidationError,
)
from logflow.domain.errors.remote import RemoteApplyError
from logflow.domain.errors.session import SessionNotActiveError
from logflow.domain.errors.sync import SnapshotDecodeError, SyncMessageError

__all__: list[str] = [
    "DurationValidationError",
    "OverrideValidationError",
    "RemoteApplyError",
    "SessionNotActiveError",
    "SnapshotDecodeError",
    "SyncMessageError",
]
