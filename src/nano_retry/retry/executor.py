"""
Retry loop and retryable wrappers.
"""

import functools
import inspect
import logging
import time
from typing import Awaitable, Callable, ParamSpec, TypeVar

from .config import RetryConfig, RetryContext
from .timing import sleep, with_timeout
from ..exceptions import AbortError, ConfigurationError, TotalTimeoutError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


async def _run_attempt(
    operation: Callable[[int], "T | Awaitable[T]"],
    attempt: int,
    config: RetryConfig,
) -> T:
    result = operation(attempt)
    if not inspect.isawaitable(result):
        return result
    if config.attempt_timeout is None and config.signal is None:
        return await result
    return await with_timeout(result, config.attempt_timeout, config.signal)


def _check_config(config: RetryConfig | None) -> RetryConfig:
    if config is None:
        return RetryConfig()
    if not isinstance(config, RetryConfig):
        raise ConfigurationError(
            f"config must be a RetryConfig, got {type(config).__name__}"
        )
    return config


async def retry(
    operation: Callable[[int], "T | Awaitable[T]"],
    config: RetryConfig | None = None,
) -> T:
    """
    Call `operation` until it succeeds, backing off between failed attempts.

    The operation receives the current attempt number (1-based) and may be a
    plain function or return an awaitable. A blocking synchronous operation
    cannot be interrupted by `attempt_timeout` or the signal; only awaitables
    take part in that race.

    Args:
        operation: Callable invoked once per attempt
        config: Retry configuration (default: RetryConfig())

    Returns:
        The first successful result

    Raises:
        AbortError: The config's signal was set
        TotalTimeoutError: The total time budget ran out
        AttemptTimeoutError: The final attempt outlived `attempt_timeout`
        Exception: The last error raised by the operation, unchanged
    """
    config = _check_config(config)
    signal = config.signal
    total_timeout = config.total_timeout

    if signal is not None and signal.is_set():
        raise AbortError()

    start = time.monotonic()
    last_error: Exception | None = None

    for attempt in range(1, config.max_attempts + 1):
        elapsed = time.monotonic() - start

        if total_timeout is not None and elapsed >= total_timeout:
            raise TotalTimeoutError(total_timeout=total_timeout) from last_error

        if signal is not None and signal.is_set():
            raise AbortError() from last_error

        try:
            return await _run_attempt(operation, attempt, config)
        except AbortError:
            raise
        except Exception as e:
            last_error = e
            retries_left = config.max_attempts - attempt

            if retries_left == 0:
                logger.debug(f"Giving up after {attempt} attempt(s): {e!r}")
                raise

            next_delay = config.delay_for(attempt)
            context = RetryContext(
                attempt=attempt,
                retries_left=retries_left,
                elapsed=time.monotonic() - start,
                next_delay=next_delay,
            )

            if config.retry_if is not None:
                if not await _resolve(config.retry_if(e, context)):
                    logger.debug(f"Not retrying attempt {attempt}: {e!r}")
                    raise

            if config.on_retry is not None:
                await _resolve(config.on_retry(e, context))

            if total_timeout is not None:
                remaining = total_timeout - (time.monotonic() - start)
                if remaining < next_delay:
                    raise TotalTimeoutError(
                        f"Total timeout of {total_timeout}s would be exceeded",
                        total_timeout=total_timeout,
                    ) from e

            logger.debug(
                f"Retry {attempt}/{config.max_retries}: {e!r}, "
                f"waiting {next_delay:.3f}s"
            )
            await sleep(next_delay, signal)

    # Unreachable while attempts are bounded; never report success here
    if last_error is not None:
        raise last_error
    raise RuntimeError("Retry loop exited unexpectedly")


def retryable(
    func: Callable[P, "T | Awaitable[T]"],
    config: RetryConfig | None = None,
) -> Callable[P, Awaitable[T]]:
    """
    Bind `func` and a fixed configuration into a retrying async callable.

    Call-time arguments are forwarded to `func` on every attempt. The bound
    configuration cannot be changed per call.

    Args:
        func: Function to retry, sync or async
        config: Retry configuration (default: RetryConfig())

    Returns:
        Async function with retry behavior
    """
    config = _check_config(config)

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return await retry(lambda _attempt: func(*args, **kwargs), config)

    return wrapper


def with_retry(
    config: RetryConfig | None = None,
) -> Callable[[Callable[P, "T | Awaitable[T]"]], Callable[P, Awaitable[T]]]:
    """
    Decorator form of `retryable`.

    Args:
        config: Retry configuration (default: RetryConfig())

    Returns:
        Decorator producing an async function with retry behavior
    """
    config = _check_config(config)

    def decorator(func: Callable[P, "T | Awaitable[T]"]) -> Callable[P, Awaitable[T]]:
        return retryable(func, config)

    return decorator
