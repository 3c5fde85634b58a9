"""
Ready-made `retry_if` predicates.

The retry loop treats errors as opaque. These helpers classify common error
shapes on the caller's behalf and are only used when passed as `retry_if`.
"""

import inspect
from typing import Iterable

import httpx

from .config import RetryContext, RetryPredicate

DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def status_code_of(error: BaseException) -> int | None:
    """
    Extract an HTTP status code from an error, if it carries one.

    Recognises `httpx.HTTPStatusError` and errors exposing an integer
    `status_code` or `status` attribute.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def retry_on_status(
    codes: Iterable[int] = DEFAULT_RETRYABLE_STATUS_CODES,
) -> RetryPredicate:
    """Retry only errors whose HTTP status is in `codes`."""
    retryable_codes = frozenset(codes)

    def predicate(error: BaseException, context: RetryContext) -> bool:
        return status_code_of(error) in retryable_codes

    return predicate


def retry_on_exceptions(*types: type[BaseException]) -> RetryPredicate:
    """Retry only errors that are instances of one of `types`."""
    if not types:
        raise TypeError("retry_on_exceptions() needs at least one exception type")

    def predicate(error: BaseException, context: RetryContext) -> bool:
        return isinstance(error, types)

    return predicate


def retry_if_retryable(error: BaseException, context: RetryContext) -> bool:
    """Retry errors that declare `retryable = True`."""
    return getattr(error, "retryable", False) is True


def retry_any(*predicates: RetryPredicate) -> RetryPredicate:
    """Retry when any of `predicates` approves. Async predicates are awaited."""

    async def predicate(error: BaseException, context: RetryContext) -> bool:
        for candidate in predicates:
            verdict = candidate(error, context)
            if inspect.isawaitable(verdict):
                verdict = await verdict
            if verdict:
                return True
        return False

    return predicate
