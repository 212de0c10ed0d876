"""Teardown notifications delivered to an owner's scope.

The hosting environment detects that an owner is gone; this module only
carries that single notification to ``scope.cancel``.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, runtime_checkable

from ..base.cancellation import CancellationScope
from ..base.errors import MisuseError

TeardownCallback = Callable[[], None]


@runtime_checkable
class TeardownSignal(Protocol):
    """A notification delivered at most once."""

    def connect(self, callback: TeardownCallback) -> None:  # pragma: no cover - interface
        """Invoke ``callback`` when (or if already) the owner is torn down."""
        ...


class OneShotTeardownSignal:
    """Concrete TeardownSignal for hosts that tear owners down explicitly.

    ``fire()`` runs the connected callbacks once; later ``fire()`` calls do
    nothing and callbacks connected after firing run immediately.
    """

    def __init__(self) -> None:
        self._callbacks: List[TeardownCallback] = []
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def connect(self, callback: TeardownCallback) -> None:
        if self._fired:
            callback()
            return
        self._callbacks.append(callback)

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


def bind_teardown(
    scope: CancellationScope,
    signal: TeardownSignal,
    reason: Optional[str] = "owner torn down",
) -> CancellationScope:
    """Cancel ``scope`` when ``signal`` fires; returns the scope."""
    if not isinstance(scope, CancellationScope):
        raise MisuseError(f"bind_teardown() requires a CancellationScope, got {type(scope).__name__}", "bind_teardown")
    if not callable(getattr(signal, "connect", None)):
        raise MisuseError(f"teardown signal must expose connect(callback), got {type(signal).__name__}", "bind_teardown")
    signal.connect(lambda: scope.cancel(reason))
    return scope


__all__ = ["TeardownSignal", "TeardownCallback", "OneShotTeardownSignal", "bind_teardown"]
