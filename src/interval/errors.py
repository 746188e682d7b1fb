class IntervalError(Exception):
    """Base exception for interval state machine operations."""


class InvalidStateError(IntervalError):
    """Raised when an operation is not allowed in the current timer state."""
