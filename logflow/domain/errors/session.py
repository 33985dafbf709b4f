"""Operator session errors."""

from logflow.domain.exceptions import LogflowError


class SessionNotActiveError(LogflowError):
    """Raised when an operator action needs a session and none is active."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: no operator session is active")
        self.operation = operation
