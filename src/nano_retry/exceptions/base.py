"""
Base exception classes for retry operations.

Each exception includes a `retryable` flag indicating whether the failure
it describes may be retried by the loop.
"""


class RetryError(Exception):
    """Base exception for all errors raised by the retry machinery."""

    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.message = message
        self.retryable = retryable

    def __str__(self) -> str:
        return self.message


class ConfigurationError(RetryError, ValueError):
    """Raised when a retry option violates its constraint. Never retried."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message, retryable=False)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} (option: {self.field})"
        return self.message


class AbortError(RetryError):
    """Raised when the cancellation signal is set. Always terminal."""

    def __init__(self, message: str = "Retry operation was aborted"):
        super().__init__(message, retryable=False)


class TimeoutError(RetryError):
    """Base class for retry timeouts."""

    def __init__(self, message: str = "Retry operation timed out", **kwargs):
        super().__init__(message, **kwargs)


class AttemptTimeoutError(TimeoutError):
    """Raised when a single attempt outlives `attempt_timeout`. Retryable."""

    def __init__(self, message: str | None = None, *, timeout: float | None = None):
        if message is None:
            message = (
                f"Attempt timed out after {timeout}s"
                if timeout is not None
                else "Attempt timed out"
            )
        super().__init__(message, retryable=True)
        self.timeout = timeout


class TotalTimeoutError(TimeoutError):
    """Raised when the overall time budget is spent. Never retried."""

    def __init__(
        self,
        message: str | None = None,
        *,
        total_timeout: float | None = None,
    ):
        if message is None:
            message = (
                f"Total timeout of {total_timeout}s exceeded"
                if total_timeout is not None
                else "Total timeout exceeded"
            )
        super().__init__(message, retryable=False)
        self.total_timeout = total_timeout
