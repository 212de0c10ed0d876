"""Unit tests for wrap/OperationGate edge cases.

Covers single settlement under same-tick races, misuse detection, factory
producers, asyncio-level cancellation on either side, and chain propagation.
"""
from __future__ import annotations

import asyncio

import pytest

from scopegate import (
    CANCELLED,
    CancellationError,
    CancellationScope,
    GateCounters,
    MisuseError,
    OperationGate,
    wrap,
)
from scopegate.base.gate import HandleState, OperationHandle


@pytest.mark.asyncio
async def test_cancel_wins_when_value_arrives_in_same_tick():
    loop = asyncio.get_running_loop()
    scope = CancellationScope()
    producer = loop.create_future()
    call = asyncio.ensure_future(wrap(scope, producer))
    await asyncio.sleep(0)

    producer.set_result("late")
    scope.cancel()

    with pytest.raises(CancellationError):
        await call


@pytest.mark.asyncio
async def test_cancel_wins_over_concurrent_failure():
    loop = asyncio.get_running_loop()
    scope = CancellationScope()
    producer = loop.create_future()
    call = asyncio.ensure_future(wrap(scope, producer))
    await asyncio.sleep(0)

    producer.set_exception(ConnectionError("NETWORK_ERROR"))
    scope.cancel()

    with pytest.raises(CancellationError) as info:
        await call
    assert info.value.sentinel is CANCELLED
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_resolved_call_is_unaffected_by_later_cancel():
    scope = CancellationScope()

    async def quick():
        return "v"

    call = asyncio.ensure_future(wrap(scope, quick()))
    assert await call == "v"

    scope.cancel()
    assert call.result() == "v"


@pytest.mark.asyncio
async def test_handle_reaches_exactly_one_terminal_state():
    loop = asyncio.get_running_loop()
    scope = CancellationScope()
    handle = OperationHandle(scope, loop)
    producer = loop.create_future()
    handle.start(producer)

    scope.cancel()
    producer.set_result("late")
    await asyncio.sleep(0)

    assert handle.state is HandleState.CANCELLED
    assert isinstance(handle.settlement.exception(), CancellationError)
    handle.release()
    assert handle.state is HandleState.CANCELLED


@pytest.mark.asyncio
async def test_factory_producer_is_called_once():
    scope = CancellationScope()
    calls = []

    async def fetch():
        calls.append(1)
        return 42

    assert await wrap(scope, fetch) == 42
    assert calls == [1]


@pytest.mark.asyncio
async def test_factory_raising_synchronously_propagates_and_unregisters():
    scope = CancellationScope()

    def factory():
        raise ValueError("bad request")

    with pytest.raises(ValueError, match="bad request"):
        await wrap(scope, factory)
    assert scope.pending == 0


@pytest.mark.asyncio
async def test_factory_returning_non_awaitable_is_misuse():
    counters = GateCounters()
    scope = CancellationScope(counters=counters)
    with pytest.raises(MisuseError):
        await wrap(scope, lambda: 42)
    assert scope.pending == 0
    snap = counters.snapshot()
    assert snap.failure_by_code == {"misuse": 1}
    assert snap.aborted == 0
    assert snap.in_flight == 0


@pytest.mark.asyncio
async def test_wrap_without_scope_is_misuse():
    async def fetch():
        return 1

    with pytest.raises(MisuseError) as info:
        await wrap(None, fetch)  # type: ignore[arg-type]
    assert info.value.operation == "wrap"


@pytest.mark.asyncio
async def test_non_awaitable_producer_is_misuse():
    with pytest.raises(MisuseError):
        await wrap(CancellationScope(), 42)  # type: ignore[arg-type]


def test_operation_gate_requires_scope():
    with pytest.raises(MisuseError):
        OperationGate(object())  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_operation_gate_delegates_to_wrap():
    scope = CancellationScope()
    gate = OperationGate(scope)

    async def fetch(value):
        return value

    assert await gate(fetch("a")) == "a"
    assert await gate.wrap(fetch("b")) == "b"
    scope.cancel()
    with pytest.raises(CancellationError):
        await gate(lambda: fetch("c"))


@pytest.mark.asyncio
async def test_caller_cancelled_by_asyncio_unregisters_and_producer_keeps_running():
    counters = GateCounters()
    scope = CancellationScope(counters=counters)
    release = asyncio.Event()
    finished = []

    async def producer():
        await release.wait()
        finished.append(True)
        return "done"

    call = asyncio.ensure_future(wrap(scope, producer()))
    await asyncio.sleep(0)
    assert scope.pending == 1

    call.cancel()
    with pytest.raises(asyncio.CancelledError):
        await call
    assert scope.pending == 0
    assert counters.snapshot().aborted == 1
    assert counters.snapshot().failed == 0

    release.set()
    await asyncio.sleep(0.01)
    assert finished == [True]


@pytest.mark.asyncio
async def test_producer_task_cancelled_by_asyncio_cancels_the_call():
    counters = GateCounters()
    scope = CancellationScope(counters=counters)
    producer = asyncio.ensure_future(asyncio.sleep(10))
    call = asyncio.ensure_future(wrap(scope, producer))
    await asyncio.sleep(0)

    producer.cancel()
    with pytest.raises(asyncio.CancelledError):
        await call
    assert scope.cancelled is False
    assert scope.pending == 0
    snap = counters.snapshot()
    assert snap.aborted == 1
    assert snap.failed == 0
    assert snap.failure_by_code == {}


@pytest.mark.asyncio
async def test_cancellation_short_circuits_a_whole_chain():
    scope = CancellationScope()
    started = []

    async def step(name, delay):
        started.append(name)
        await asyncio.sleep(delay)
        return name

    async def load_profile():
        user = await wrap(scope, lambda: step("user", 0.05))
        prefs = await wrap(scope, lambda: step(f"prefs-{user}", 0.01))
        return user, prefs

    chain = asyncio.ensure_future(load_profile())
    await asyncio.sleep(0.01)
    scope.cancel()

    with pytest.raises(CancellationError):
        await chain
    assert started == ["user"]
    await asyncio.sleep(0.05)


@pytest.mark.asyncio
async def test_counters_track_outcomes():
    counters = GateCounters("counted")
    scope = CancellationScope(counters=counters)

    async def ok():
        return 1

    async def fail():
        raise TimeoutError("slow upstream")

    await wrap(scope, ok())
    with pytest.raises(TimeoutError):
        await wrap(scope, fail())
    scope.cancel()
    with pytest.raises(CancellationError):
        await wrap(scope, ok)

    snap = counters.snapshot()
    assert snap.total == 3
    assert snap.resolved == 1
    assert snap.failed == 1
    assert snap.failure_by_code == {"timeout": 1}
    assert snap.rejected_early == 1
    assert snap.in_flight == 0
