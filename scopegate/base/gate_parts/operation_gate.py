"""Gate filtering a producer's settlement through a cancellation scope."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, TypeVar, Union

from ..cancellation_parts.cancellation_error import CancellationError
from ..cancellation_parts.cancellation_scope import CancellationScope
from ..errors_parts.misuse_error import MisuseError
from .operation_handle import OperationHandle

T = TypeVar("T")

Producer = Union[Awaitable[T], Callable[[], Awaitable[T]]]


def _discard_producer(producer: Any) -> None:
    """Release a producer that will never run.

    Coroutine objects are closed so they neither start nor warn about never
    being awaited. Tasks and futures belong to whoever created them and are
    left alone.
    """
    if inspect.iscoroutine(producer):
        producer.close()


async def wrap(scope: CancellationScope, producer: Producer[T]) -> T:
    """Await ``producer`` and return its outcome unless ``scope`` is cancelled first.

    ``producer`` is an awaitable or a zero-argument callable returning one.
    A factory is only called when the scope is still open.

    Raises:
        MisuseError: ``scope`` is not a CancellationScope, or ``producer`` is
            neither awaitable nor callable.
        CancellationError: the scope was cancelled before the call or while
            it was pending. Takes precedence over a concurrent producer error.
        Exception: the producer's own failure, unchanged.
    """
    if not isinstance(scope, CancellationScope):
        raise MisuseError(
            f"wrap() requires a CancellationScope, got {type(scope).__name__}",
            "wrap",
        )
    if not (inspect.isawaitable(producer) or callable(producer)):
        raise MisuseError(
            f"producer must be awaitable or a zero-argument callable, got {type(producer).__name__}",
            "wrap",
        )
    if scope.cancelled:
        _discard_producer(producer)
        if scope.counters is not None:
            scope.counters.record_rejected_early()
        raise CancellationError(scope.reason)

    handle = OperationHandle(scope, asyncio.get_running_loop())
    try:
        handle.start(producer)
        return await handle.settlement
    finally:
        handle.release()


class OperationGate:
    """A gate bound to one scope; ``await gate(producer)`` is ``wrap(scope, producer)``."""

    __slots__ = ("_scope",)

    def __init__(self, scope: CancellationScope) -> None:
        if not isinstance(scope, CancellationScope):
            raise MisuseError(
                f"OperationGate requires a CancellationScope, got {type(scope).__name__}",
                "OperationGate",
            )
        self._scope = scope

    @property
    def scope(self) -> CancellationScope:
        return self._scope

    async def wrap(self, producer: Producer[T]) -> T:
        return await wrap(self._scope, producer)

    async def __call__(self, producer: Producer[T]) -> T:
        return await wrap(self._scope, producer)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"OperationGate(scope={self._scope!r})"


__all__ = ["OperationGate", "Producer", "wrap"]
