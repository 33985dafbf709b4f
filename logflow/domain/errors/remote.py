"""Remote applier errors."""

from logflow.domain.exceptions import LogflowError


class RemoteApplyError(LogflowError):
    """Raised when a backend log-level call is rejected or unreachable.

    Attributes:
        url: The endpoint that was attempted.
        status_code: HTTP status when a response was received, else None.
    """

    def __init__(
        self,
        url: str,
        status_code: int | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with the failing endpoint.

        Args:
            url: The endpoint that was attempted.
            status_code: HTTP status when a response was received.
            message: Optional custom error message.
        """
        if message is None:
            if status_code is None:
                message = f"Network error calling {url}"
            else:
                message = f"HTTP {status_code} from {url}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
