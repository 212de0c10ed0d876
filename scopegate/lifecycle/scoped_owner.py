"""Owner helpers: one scope per owner, cancelled at teardown."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, TypeVar

from ..base.cancellation import CancellationScope
from ..base.gate import Producer, wrap
from ..base.metrics import GateCounters

T = TypeVar("T")


class ScopedOwner:
    """Base class for components, jobs or handlers that gate their async calls.

    The scope is created with the owner. Subclasses issue calls through
    :meth:`gate` (or decorate async methods with
    :func:`scopegate.base.gate.gated`) and the host calls :meth:`teardown`
    when the owner goes away.

    Example::

        class ProfileView(ScopedOwner):
            async def load(self, user_id):
                profile = await self.gate(api.fetch_profile(user_id))
                self.render(profile)
    """

    def __init__(self, name: Optional[str] = None, *, counters: Optional[GateCounters] = None) -> None:
        owner = type(self).__name__
        self.scope = CancellationScope(name or owner, counters=counters, owner=owner)

    @property
    def torn_down(self) -> bool:
        return self.scope.cancelled

    async def gate(self, producer: Producer[T]) -> T:
        return await wrap(self.scope, producer)

    def teardown(self, reason: Optional[str] = "owner torn down") -> None:
        """Cancel the owner's scope; safe to call more than once."""
        self.scope.cancel(reason)


@asynccontextmanager
async def owned_scope(
    name: Optional[str] = None,
    *,
    counters: Optional[GateCounters] = None,
    reason: Optional[str] = "scope exited",
) -> AsyncIterator[CancellationScope]:
    """Yield a fresh scope and cancel it when the block exits, however it exits."""
    scope = CancellationScope(name, counters=counters)
    try:
        yield scope
    finally:
        scope.cancel(reason)


__all__ = ["ScopedOwner", "owned_scope"]
