"""
nano-retry - Exception Hierarchy.

Errors raised by the retry loop itself. Errors raised by the retried
operation are propagated unchanged and never wrapped.
"""

from .base import (
    RetryError,
    ConfigurationError,
    AbortError,
    TimeoutError,
    AttemptTimeoutError,
    TotalTimeoutError,
)

__all__ = [
    "RetryError",
    "ConfigurationError",
    "AbortError",
    "TimeoutError",
    "AttemptTimeoutError",
    "TotalTimeoutError",
]
