"""Rejection port backed by an asyncio event loop's exception handler.

asyncio reports failures nobody observed (``Task exception was never
retrieved``, ``Future exception was never retrieved``) through
``loop.call_exception_handler``. This port installs its own handler on the
first subscription, offers each report carrying an exception to its
listeners, and passes anything left unhandled on to the handler that was
installed before it (or the loop's default handler).
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from .rejection_port import RejectionListener
from .unhandled_rejection import UnhandledRejection

ExceptionHandler = Callable[[asyncio.AbstractEventLoop, Dict[str, Any]], object]


class AsyncioRejectionPort:
    """UnhandledRejectionPort over ``loop.set_exception_handler``."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._listeners: List[RejectionListener] = []
        self._previous: Optional[ExceptionHandler] = None
        self._attached = False

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: RejectionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        self._attach()

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
            if not self._listeners:
                self._detach()

        return unsubscribe

    def _attach(self) -> None:
        if self._attached:
            return
        self._previous = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle)
        self._attached = True

    def _detach(self) -> None:
        if not self._attached:
            return
        # Only restore if nobody replaced our handler in the meantime.
        if self._loop.get_exception_handler() == self._handle:
            self._loop.set_exception_handler(self._previous)
        self._previous = None
        self._attached = False

    def _handle(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        if exc is not None:
            rejection = UnhandledRejection(reason=exc, context=dict(context))
            for listener in list(self._listeners):
                listener(rejection)
                if rejection.handled:
                    return
        self._forward(loop, context)

    def _forward(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        if self._previous is not None:
            self._previous(loop, context)
        else:
            loop.default_exception_handler(context)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"AsyncioRejectionPort(attached={self._attached}, listeners={len(self._listeners)})"


__all__ = ["AsyncioRejectionPort"]
