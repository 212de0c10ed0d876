"""Gate behaviour under the owner-teardown races.

Scenarios
---------
1. No cancellation: the producer's value arrives on schedule.
2. Cancellation mid-wait: rejection at cancel time, never a late value.
3. Cancellation before the call: immediate rejection, producer never runs.
4. Producer failure without cancellation: original error, not the sentinel.
5. Concurrent calls cancelled together: all reject, none resolve.

Timings use small delays and generous upper bounds.
"""
from __future__ import annotations

import asyncio
import inspect

import pytest

from scopegate import CANCELLED, CancellationError, CancellationScope, GateCounters, wrap


async def resolves_at(delay: float, value):
    await asyncio.sleep(delay)
    return value


async def rejects_at(delay: float, exc: BaseException):
    await asyncio.sleep(delay)
    raise exc


@pytest.mark.asyncio
async def test_resolves_with_producer_value_when_not_cancelled():
    loop = asyncio.get_running_loop()
    scope = CancellationScope.create("scenario-1")
    started = loop.time()

    result = await wrap(scope, resolves_at(0.01, "A"))

    assert result == "A"
    assert loop.time() - started >= 0.009
    assert scope.pending == 0


@pytest.mark.asyncio
async def test_cancel_during_wait_rejects_at_cancel_time():
    loop = asyncio.get_running_loop()
    counters = GateCounters("scenario-2")
    scope = CancellationScope.create("scenario-2", counters=counters)
    started = loop.time()
    call = asyncio.ensure_future(wrap(scope, resolves_at(0.1, "A")))

    await asyncio.sleep(0.01)
    scope.cancel()
    with pytest.raises(CancellationError) as info:
        await call

    assert info.value.sentinel is CANCELLED
    assert loop.time() - started < 0.08

    # The producer still completes; its value is dropped.
    await asyncio.sleep(0.12)
    snap = counters.snapshot()
    assert snap.cancelled == 1
    assert snap.resolved == 0
    assert snap.discarded == 1


@pytest.mark.asyncio
async def test_wrap_after_cancel_rejects_immediately_without_running_producer():
    loop = asyncio.get_running_loop()
    scope = CancellationScope.create("scenario-3")
    scope.cancel()
    producer = resolves_at(0.01, "A")
    started = loop.time()

    with pytest.raises(CancellationError) as info:
        await wrap(scope, producer)

    assert info.value.sentinel is CANCELLED
    assert loop.time() - started < 0.005
    assert inspect.getcoroutinestate(producer) == inspect.CORO_CLOSED


@pytest.mark.asyncio
async def test_wrap_after_cancel_never_calls_factory():
    scope = CancellationScope()
    scope.cancel()
    calls = []

    def factory():
        calls.append(1)
        return resolves_at(0.01, "A")

    for _ in range(3):
        with pytest.raises(CancellationError):
            await wrap(scope, factory)

    assert calls == []
    assert scope.pending == 0


@pytest.mark.asyncio
async def test_producer_failure_propagates_unchanged():
    scope = CancellationScope.create("scenario-4")
    failure = ConnectionError("NETWORK_ERROR")

    with pytest.raises(ConnectionError) as info:
        await wrap(scope, rejects_at(0.01, failure))

    assert info.value is failure
    assert scope.pending == 0


@pytest.mark.asyncio
async def test_concurrent_calls_all_reject_on_cancel():
    scope = CancellationScope.create("scenario-5")
    first = asyncio.ensure_future(wrap(scope, resolves_at(0.03, "A")))
    second = asyncio.ensure_future(wrap(scope, resolves_at(0.05, "B")))
    await asyncio.sleep(0)
    assert scope.pending == 2

    scope.cancel()
    results = await asyncio.gather(first, second, return_exceptions=True)

    assert all(isinstance(r, CancellationError) and r.sentinel is CANCELLED for r in results)
    await asyncio.sleep(0.06)


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [1, 7, 64])
async def test_mass_cancellation_rejects_every_pending_call(count):
    release = asyncio.Event()
    counters = GateCounters()
    scope = CancellationScope(counters=counters)

    async def blocked(i):
        await release.wait()
        return i

    calls = [asyncio.ensure_future(wrap(scope, blocked(i))) for i in range(count)]
    await asyncio.sleep(0)
    assert scope.pending == count

    scope.cancel()
    assert scope.pending == 0

    results = await asyncio.gather(*calls, return_exceptions=True)
    assert len(results) == count
    assert all(isinstance(r, CancellationError) for r in results)

    release.set()
    await asyncio.sleep(0.01)
    snap = counters.snapshot()
    assert snap.cancelled == count
    assert snap.resolved == 0
    assert snap.discarded == count
    assert snap.in_flight == 0
