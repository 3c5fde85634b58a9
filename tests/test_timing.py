"""Tests for cancellable sleep and the attempt timeout race."""

import asyncio
import gc
import time

import pytest
from nano_retry.exceptions import AbortError, AttemptTimeoutError
from nano_retry.retry import sleep, with_timeout


class TestSleep:
    """Test cancellable sleep behavior."""

    @pytest.mark.asyncio
    async def test_sleeps_without_signal(self):
        """With no signal, sleep simply waits."""
        started = time.monotonic()

        await sleep(0.05)

        assert time.monotonic() - started >= 0.045

    @pytest.mark.asyncio
    async def test_completes_when_signal_never_set(self):
        """An unset signal does not shorten the wait."""
        signal = asyncio.Event()
        started = time.monotonic()

        await sleep(0.05, signal)

        assert time.monotonic() - started >= 0.045
        assert not signal.is_set()

    @pytest.mark.asyncio
    async def test_already_set_signal_aborts_immediately(self):
        """A set signal aborts without waiting."""
        signal = asyncio.Event()
        signal.set()
        started = time.monotonic()

        with pytest.raises(AbortError):
            await sleep(5, signal)

        assert time.monotonic() - started < 0.5

    @pytest.mark.asyncio
    async def test_signal_during_wait_aborts(self):
        """Setting the signal mid-wait aborts promptly."""
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.02, signal.set)
        started = time.monotonic()

        with pytest.raises(AbortError):
            await sleep(5, signal)

        assert time.monotonic() - started < 0.5


class TestWithTimeout:
    """Test the race between an attempt, its deadline and the signal."""

    @pytest.mark.asyncio
    async def test_returns_result_when_attempt_wins(self):
        """A fast attempt's result is returned."""

        async def attempt():
            return "value"

        assert await with_timeout(attempt(), 1.0) == "value"

    @pytest.mark.asyncio
    async def test_propagates_attempt_error(self):
        """An attempt's own error is raised unchanged."""

        async def attempt():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await with_timeout(attempt(), 1.0)

    @pytest.mark.asyncio
    async def test_deadline_raises_attempt_timeout_and_cancels(self):
        """A slow attempt times out and is cancelled."""
        cancelled = asyncio.Event()

        async def attempt():
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        with pytest.raises(AttemptTimeoutError) as exc_info:
            await with_timeout(attempt(), 0.02)

        assert exc_info.value.timeout == 0.02
        await asyncio.wait_for(cancelled.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_signal_wins_race(self):
        """Setting the signal aborts the in-flight attempt."""
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.02, signal.set)

        async def attempt():
            await asyncio.sleep(5)

        with pytest.raises(AbortError):
            await with_timeout(attempt(), 10.0, signal)

    @pytest.mark.asyncio
    async def test_already_set_signal_never_starts_attempt(self):
        """A set signal aborts before the attempt runs."""
        signal = asyncio.Event()
        signal.set()
        started = []

        async def attempt():
            started.append(True)

        with pytest.raises(AbortError):
            await with_timeout(attempt(), 1.0, signal)

        assert started == []

    @pytest.mark.asyncio
    async def test_no_deadline_waits_for_signal_or_result(self):
        """With timeout=None only the signal can interrupt."""
        signal = asyncio.Event()

        async def attempt():
            await asyncio.sleep(0.02)
            return 7

        assert await with_timeout(attempt(), None, signal) == 7

    @pytest.mark.asyncio
    async def test_signal_set_as_attempt_fails_aborts_cleanly(self):
        """Abort beats a simultaneous failure and the failure is not left unretrieved."""
        signal = asyncio.Event()
        loop = asyncio.get_running_loop()
        reported = []

        async def attempt():
            signal.set()
            raise ValueError("failed in the same step")

        loop.set_exception_handler(lambda _loop, context: reported.append(context))
        try:
            with pytest.raises(AbortError):
                await with_timeout(attempt(), 1.0, signal)
            gc.collect()
            await asyncio.sleep(0)
        finally:
            loop.set_exception_handler(None)

        assert reported == []
