"""
nano-retry - Retry Logic.

Exponential backoff with jitter, per-attempt and total timeouts, and
cancellation through an `asyncio.Event`.
"""

from .config import RetryConfig, RetryContext
from .backoff import calculate_backoff
from .timing import sleep, with_timeout
from .executor import retry, retryable, with_retry
from .predicates import (
    DEFAULT_RETRYABLE_STATUS_CODES,
    retry_any,
    retry_if_retryable,
    retry_on_exceptions,
    retry_on_status,
    status_code_of,
)

__all__ = [
    "RetryConfig",
    "RetryContext",
    "calculate_backoff",
    "sleep",
    "with_timeout",
    "retry",
    "retryable",
    "with_retry",
    "DEFAULT_RETRYABLE_STATUS_CODES",
    "retry_any",
    "retry_if_retryable",
    "retry_on_exceptions",
    "retry_on_status",
    "status_code_of",
]
