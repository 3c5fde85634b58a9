"""
nano-retry - Retry async operations with exponential backoff.

Bounded retries, jittered backoff, per-attempt and total timeouts, and
cooperative cancellation for sync or async callables.
"""

from .exceptions import (
    RetryError,
    ConfigurationError,
    AbortError,
    TimeoutError,
    AttemptTimeoutError,
    TotalTimeoutError,
)
from .retry import (
    RetryConfig,
    RetryContext,
    calculate_backoff,
    retry,
    retryable,
    with_retry,
    retry_any,
    retry_if_retryable,
    retry_on_exceptions,
    retry_on_status,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "RetryError",
    "ConfigurationError",
    "AbortError",
    "TimeoutError",
    "AttemptTimeoutError",
    "TotalTimeoutError",
    # Retry
    "RetryConfig",
    "RetryContext",
    "calculate_backoff",
    "retry",
    "retryable",
    "with_retry",
    # Predicates
    "retry_any",
    "retry_if_retryable",
    "retry_on_exceptions",
    "retry_on_status",
]
