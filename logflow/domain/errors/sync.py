"""Cross-tab synchronization errors.

Both errors are recovered inside the sync channel: the malformed payload
is discarded and the tab keeps its last-known-good state.
"""

from logflow.domain.exceptions import LogflowError


class SnapshotDecodeError(LogflowError):
    """Raised when a persisted override snapshot cannot be decoded."""

    pass


class SyncMessageError(LogflowError):
    """Raised when a broadcast message is not a recognised sync message."""

    pass
