"""
Cancellable sleep and per-attempt timeout race.

Both primitives race their work against an optional `asyncio.Event` used as
a cancellation signal. Whichever side finishes first decides the outcome and
the other side is cancelled before returning.
"""

import asyncio
from typing import Awaitable, TypeVar

from ..exceptions import AbortError, AttemptTimeoutError

T = TypeVar("T")


async def sleep(delay: float, signal: asyncio.Event | None = None) -> None:
    """
    Sleep for `delay` seconds unless `signal` is set first.

    Args:
        delay: Seconds to wait
        signal: Optional cancellation event

    Raises:
        AbortError: If the signal is already set or becomes set while waiting
    """
    if signal is None:
        await asyncio.sleep(delay)
        return

    if signal.is_set():
        raise AbortError()

    try:
        # wait_for cancels the pending signal wait when the timer wins
        await asyncio.wait_for(signal.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise AbortError()


async def with_timeout(
    awaitable: Awaitable[T],
    timeout: float | None,
    signal: asyncio.Event | None = None,
) -> T:
    """
    Await `awaitable`, racing it against a deadline and a cancellation signal.

    Args:
        awaitable: The attempt in flight
        timeout: Seconds allowed for the attempt, or None for no deadline
        signal: Optional cancellation event

    Returns:
        The awaitable's result if it settles first

    Raises:
        AbortError: If the signal wins the race
        AttemptTimeoutError: If the deadline wins the race
    """
    if signal is not None and signal.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise AbortError()

    task = asyncio.ensure_future(awaitable)
    waiters = {task}
    abort_waiter = None
    if signal is not None:
        abort_waiter = asyncio.ensure_future(signal.wait())
        waiters.add(abort_waiter)

    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        if abort_waiter is not None:
            abort_waiter.cancel()

    if abort_waiter is not None and abort_waiter in done:
        _discard(task)
        raise AbortError()
    if task in done:
        return task.result()

    task.cancel()
    raise AttemptTimeoutError(timeout=timeout)


def _discard(task: asyncio.Future) -> None:
    """Cancel a losing task, or consume its outcome if it already settled."""
    if not task.done():
        task.cancel()
    elif not task.cancelled():
        task.exception()
