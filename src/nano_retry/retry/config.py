"""
Retry configuration and per-attempt context.
"""

import asyncio
import math
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..exceptions import ConfigurationError
from .backoff import calculate_backoff


@dataclass(frozen=True)
class RetryContext:
    """
    Read-only view of the retry state handed to `retry_if` and `on_retry`.

    Attributes:
        attempt: Attempt that just failed (1-based, includes the initial attempt)
        retries_left: Attempts still permitted after this one
        elapsed: Seconds since the retry call started
        next_delay: Seconds the loop will wait before the next attempt
    """

    attempt: int
    retries_left: int
    elapsed: float
    next_delay: float


RetryPredicate = Callable[[BaseException, RetryContext], "bool | Awaitable[bool]"]
RetryCallback = Callable[[BaseException, RetryContext], "None | Awaitable[None]"]


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_positive(name: str, value, *, allow_inf: bool = False) -> None:
    if not _is_number(value):
        raise ConfigurationError(f"{name} must be a number", field=name)
    try:
        number = float(value)
    except OverflowError:
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        raise ConfigurationError(f"{name} must be a number", field=name)
    if number <= 0:
        raise ConfigurationError(f"{name} must be positive", field=name)
    if math.isinf(number) and not allow_inf:
        raise ConfigurationError(f"{name} must be finite", field=name)


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    All durations are in seconds. Options are validated on construction, so
    an invalid configuration fails before any attempt runs.

    Attributes:
        max_retries: Retries after the initial attempt (default: 3)
        base_delay: Delay before the first retry (default: 1.0)
        max_delay: Cap applied to every computed delay (default: 30.0)
        factor: Exponential growth factor (default: 2.0)
        jitter: Randomize delays by ±25% (default: True)
        attempt_timeout: Deadline for each individual attempt
        total_timeout: Deadline for all attempts and delays combined
        signal: Event that aborts the whole operation once set
        retry_if: Predicate(error, context) deciding whether to retry
        on_retry: Callback(error, context) invoked before each delay
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    factor: float = 2.0
    jitter: bool = True
    attempt_timeout: float | None = None
    total_timeout: float | None = None
    signal: asyncio.Event | None = field(default=None, compare=False, repr=False)
    retry_if: RetryPredicate | None = field(default=None, compare=False, repr=False)
    on_retry: RetryCallback | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if (
            isinstance(self.max_retries, bool)
            or not isinstance(self.max_retries, int)
            or self.max_retries < 0
        ):
            raise ConfigurationError(
                "max_retries must be a non-negative integer", field="max_retries"
            )
        if not isinstance(self.jitter, bool):
            raise ConfigurationError("jitter must be a bool", field="jitter")
        _require_positive("base_delay", self.base_delay)
        _require_positive("max_delay", self.max_delay, allow_inf=True)
        _require_positive("factor", self.factor)
        if self.attempt_timeout is not None:
            _require_positive("attempt_timeout", self.attempt_timeout)
        if self.total_timeout is not None:
            _require_positive("total_timeout", self.total_timeout)
        if self.signal is not None and not (
            callable(getattr(self.signal, "is_set", None))
            and callable(getattr(self.signal, "wait", None))
        ):
            raise ConfigurationError(
                "signal must provide is_set() and wait()", field="signal"
            )
        if self.retry_if is not None and not callable(self.retry_if):
            raise ConfigurationError("retry_if must be callable", field="retry_if")
        if self.on_retry is not None and not callable(self.on_retry):
            raise ConfigurationError("on_retry must be callable", field="on_retry")

    @property
    def max_attempts(self) -> int:
        """Total number of attempts, including the initial one."""
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay that follows the given failed attempt (1-based)."""
        return calculate_backoff(
            attempt, self.base_delay, self.max_delay, self.factor, self.jitter
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_retries=0)
