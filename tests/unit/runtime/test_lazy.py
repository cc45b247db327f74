"""Unit tests for single-flight deferred values."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from teamcity.rest.runtime import BlockingSingleFlight, DeferredState, SingleFlight


class TestSingleFlight:
    """Test the cooperative single-flight cell."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_computation(self):
        """N concurrent get_value calls run the producer once and agree on the value."""
        calls = 0
        release = asyncio.Event()

        async def producer() -> object:
            nonlocal calls
            calls += 1
            await release.wait()
            return object()

        cell = SingleFlight(producer)
        waiters = [asyncio.ensure_future(cell.get_value()) for _ in range(20)]
        await asyncio.sleep(0)
        assert cell.state is DeferredState.IN_PROGRESS

        release.set()
        results = await asyncio.gather(*waiters)

        assert calls == 1
        assert all(r is results[0] for r in results)
        assert cell.is_completed

    @pytest.mark.asyncio
    async def test_state_transitions(self):
        async def producer() -> int:
            return 7

        cell = SingleFlight(producer)
        assert cell.state is DeferredState.NOT_STARTED
        assert await cell.get_value() == 7
        assert cell.state is DeferredState.COMPLETED
        assert await cell.get_value() == 7

    @pytest.mark.asyncio
    async def test_failure_is_memoized(self):
        """A failed computation re-raises the same exception without re-running."""
        calls = 0

        async def producer() -> int:
            nonlocal calls
            calls += 1
            raise RuntimeError("down")

        cell = SingleFlight(producer)
        with pytest.raises(RuntimeError) as first:
            await cell.get_value()
        with pytest.raises(RuntimeError) as second:
            await cell.get_value()

        assert first.value is second.value
        assert calls == 1
        assert cell.is_completed

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_computation(self):
        """Cancelling one waiter leaves the shared computation running for others."""
        release = asyncio.Event()

        async def producer() -> str:
            await release.wait()
            return "done"

        cell = SingleFlight(producer)
        first = asyncio.ensure_future(cell.get_value())
        second = asyncio.ensure_future(cell.get_value())
        await asyncio.sleep(0)

        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first

        release.set()
        assert await second == "done"
        assert cell.is_completed


class TestBlockingSingleFlight:
    """Test the thread-model single-flight cell."""

    def test_threads_share_one_computation(self):
        calls = 0
        counter_lock = threading.Lock()

        def producer() -> object:
            nonlocal calls
            with counter_lock:
                calls += 1
            time.sleep(0.05)
            return object()

        cell = BlockingSingleFlight(producer)
        results: list[object] = []

        def worker() -> None:
            results.append(cell.get_value())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert calls == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_failure_is_memoized(self):
        calls = 0

        def producer() -> int:
            nonlocal calls
            calls += 1
            raise ValueError("bad")

        cell = BlockingSingleFlight(producer)
        with pytest.raises(ValueError) as first:
            cell.get_value()
        with pytest.raises(ValueError) as second:
            cell.get_value()

        assert first.value is second.value
        assert calls == 1
        assert cell.state is DeferredState.COMPLETED
