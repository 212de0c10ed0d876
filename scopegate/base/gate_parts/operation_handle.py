"""Per-call settlement race between a producer and its scope.

An ``OperationHandle`` owns a one-shot ``asyncio.Future`` (the settlement).
Whichever side reaches it first wins: the producer's task completing, or the
scope invoking the registered reject callback during ``cancel()``. The losing
side finds the future already done and its outcome is dropped.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Optional, Set

from ...config.defaults import ANONYMOUS_SCOPE_NAME
from ..cancellation_parts.cancellation_error import CancellationError
from ..cancellation_parts.cancellation_scope import CancellationScope
from ..errors_parts.classification import classify_exception
from ..errors_parts.misuse_error import MisuseError
from ..log_support import LogContext
from ..logging import get_logger, log_event
from .handle_state import HandleState

_logger = get_logger("scopegate.gate")

# Producer tasks are referenced here until they finish; the event loop only
# keeps weak references to tasks.
_IN_FLIGHT: Set["asyncio.Future[Any]"] = set()


def resolve_awaitable(producer: Any) -> Awaitable[Any]:
    """Return the awaitable for ``producer``, calling it first if it is a factory."""
    if inspect.isawaitable(producer):
        return producer
    result = producer()
    if not inspect.isawaitable(result):
        raise MisuseError(
            f"producer factory returned non-awaitable {type(result).__name__}",
            "wrap",
        )
    return result


class OperationHandle:
    """Transient settlement state for one gated call."""

    __slots__ = ("_scope", "_settlement", "_token", "_state", "_source")

    def __init__(self, scope: CancellationScope, loop: asyncio.AbstractEventLoop) -> None:
        self._scope = scope
        self._state = HandleState.PENDING
        self._source: Optional["asyncio.Future[Any]"] = None
        self._settlement: "asyncio.Future[Any]" = loop.create_future()
        # Raises CancellationError if the scope closed in the meantime.
        self._token = scope.register(self._reject)
        if scope.counters is not None:
            scope.counters.record_start()

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def settlement(self) -> "asyncio.Future[Any]":
        return self._settlement

    # Producer side -----------------------------------------------------------
    def start(self, producer: Any) -> None:
        """Start the producer and route its outcome into the settlement."""
        try:
            awaitable = resolve_awaitable(producer)
        except MisuseError as exc:
            self._scope.unregister(self._token)
            self._settlement.cancel()
            self._finish(HandleState.FAILED, exc)
            raise
        except Exception as exc:  # noqa: BLE001 - a raising factory is a producer failure
            self._scope.unregister(self._token)
            self._settle_failure(exc)
            return
        source = asyncio.ensure_future(awaitable)
        self._source = source
        _IN_FLIGHT.add(source)
        source.add_done_callback(self._on_source_done)

    def _on_source_done(self, source: "asyncio.Future[Any]") -> None:
        _IN_FLIGHT.discard(source)
        self._scope.unregister(self._token)
        if source.cancelled():
            if self._settlement.done():
                self._discard("aborted")
                return
            self._settlement.cancel()
            self._finish(HandleState.ABORTED, asyncio.CancelledError())
            return
        # Retrieving the exception here also keeps a late failure from being
        # reported as "exception was never retrieved".
        exc = source.exception()
        if exc is not None:
            self._settle_failure(exc)
            return
        if self._settlement.done():
            self._discard("value")
            return
        self._settlement.set_result(source.result())
        self._finish(HandleState.RESOLVED)

    def _settle_failure(self, exc: BaseException) -> None:
        if self._settlement.done():
            self._discard("error", exc)
            return
        self._settlement.set_exception(exc)
        self._finish(HandleState.FAILED, exc)

    # Scope side ----------------------------------------------------------------
    def _reject(self, sentinel: Any) -> None:
        if self._settlement.done():
            return
        self._settlement.set_exception(CancellationError(self._scope.reason))
        self._finish(HandleState.CANCELLED)

    # Caller side ---------------------------------------------------------------
    def release(self) -> None:
        """Drop the scope registration once the caller stops waiting.

        Covers the caller being cancelled by asyncio and ``start`` raising
        before the producer was scheduled; the producer itself is left to run.
        """
        self._scope.unregister(self._token)
        if self._settlement.done() and not self._settlement.cancelled():
            # The caller may have been cancelled after settlement but before
            # resuming; mark the outcome retrieved.
            self._settlement.exception()
        if self._state is not HandleState.PENDING:
            return
        if not self._settlement.done():
            self._settlement.cancel()
        self._finish(HandleState.ABORTED, asyncio.CancelledError())

    # Bookkeeping ---------------------------------------------------------------
    def _finish(self, state: HandleState, exc: Optional[BaseException] = None) -> None:
        self._state = state
        counters = self._scope.counters
        if counters is None:
            return
        if state is HandleState.RESOLVED:
            counters.record_resolved()
        elif state is HandleState.CANCELLED:
            counters.record_cancelled()
        elif state is HandleState.ABORTED:
            counters.record_aborted()
        else:
            counters.record_failed(classify_exception(exc).value if exc is not None else "unknown")

    def _discard(self, outcome: str, exc: Optional[BaseException] = None) -> None:
        if self._scope.counters is not None:
            self._scope.counters.record_discarded()
        log_event(
            _logger,
            "gate.discard",
            LogContext(scope=self._scope.name or ANONYMOUS_SCOPE_NAME, owner=self._scope.owner),
            level=logging.DEBUG,
            outcome=outcome,
            state=self._state.value,
            error_code=classify_exception(exc).value if exc is not None else None,
        )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"OperationHandle(state={self._state.value}, scope={self._scope.name!r})"


__all__ = ["OperationHandle", "resolve_awaitable"]
