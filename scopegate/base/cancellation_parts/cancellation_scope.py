"""Per-owner cancellation scope implementation.

A scope is created by its owner, handed to every gated call the owner issues,
and cancelled once when the owner is torn down. Cancelling rejects every call
still waiting under the scope before ``cancel()`` returns.
"""

from __future__ import annotations

import itertools
import logging
import weakref
from typing import Iterator, Optional

from ...config.defaults import ANONYMOUS_SCOPE_NAME
from ..errors_parts.misuse_error import MisuseError
from ..logging import get_logger, log_event
from ..log_support import LogContext
from ..metrics.counters import GateCounters
from .cancellation_error import CancellationError
from .sentinel import CANCELLED
from .state import RejectFn, ScopeState

_logger = get_logger("scopegate.scope")


class CancellationScope:
    """A revocable token tracking cancellation state and pending gated calls.

    Only the gate registers waiters, one per in-flight call. ``cancel`` is a
    one-way, idempotent transition; child scopes inherit it.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        counters: Optional[GateCounters] = None,
        parent: "CancellationScope | None" = None,
        owner: Optional[str] = None,
    ) -> None:
        if owner is None and parent is not None:
            owner = parent.owner
        self._name = name
        self._owner = owner
        self._state = ScopeState()
        self._tokens: Iterator[int] = itertools.count(1)
        self._children: "weakref.WeakSet[CancellationScope]" = weakref.WeakSet()
        self.counters = counters
        if parent is not None:
            parent.link_child(self)

    @classmethod
    def create(
        cls,
        name: Optional[str] = None,
        *,
        counters: Optional[GateCounters] = None,
        owner: Optional[str] = None,
    ) -> "CancellationScope":
        """Return a fresh, uncancelled scope."""
        return cls(name, counters=counters, owner=owner)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def owner(self) -> Optional[str]:
        """Label of the owner that holds this scope, used in log context."""
        return self._owner

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether the scope has been cancelled."""
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Diagnostic reason supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def pending(self) -> int:
        """Number of gated calls currently awaiting settlement."""
        return len(self._state.pending_waiters)

    # Waiters ---------------------------------------------------------------
    def register(self, reject_fn: RejectFn) -> int:
        """Register a one-shot reject callback and return its unregister token.

        Raises ``CancellationError`` without registering when the scope is
        already cancelled, so no new wait can start on a closed scope.
        """
        if not callable(reject_fn):
            raise MisuseError("reject_fn must be callable", "register")
        if self._state.cancelled:
            raise CancellationError(self._state.reason)
        token = next(self._tokens)
        self._state.pending_waiters[token] = reject_fn
        return token

    def unregister(self, token: int) -> bool:
        """Remove the waiter for ``token``; return False if it was already gone."""
        return self._state.pending_waiters.pop(token, None) is not None

    # Cancellation ----------------------------------------------------------
    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel the scope, reject every pending waiter, and cascade to children.

        All waiters registered at call time are notified before this method
        returns. A waiter raising does not stop the drain; the first such
        error is re-raised once every waiter has been notified.
        """
        state = self._state
        if state.cancelled:
            return
        state.cancelled = True
        state.reason = reason
        waiters = list(state.pending_waiters.values())
        state.pending_waiters.clear()

        first_error: Optional[Exception] = None
        for reject_fn in waiters:
            try:
                reject_fn(CANCELLED)
            except Exception as exc:  # noqa: BLE001 - re-raised after the drain
                log_event(
                    _logger,
                    "scope.waiter_error",
                    self._log_context(),
                    level=logging.ERROR,
                    error=repr(exc),
                )
                if first_error is None:
                    first_error = exc

        log_event(
            _logger,
            "scope.cancel",
            self._log_context(),
            level=logging.DEBUG,
            drained=len(waiters),
            reason=reason,
        )
        for child in list(self._children):
            child.cancel(reason)
        if first_error is not None:
            raise first_error

    def raise_if_cancelled(self) -> None:
        """Raise ``CancellationError`` if the scope is cancelled."""
        if self._state.cancelled:
            raise CancellationError(self._state.reason)

    # Children ----------------------------------------------------------------
    def link_child(self, scope: "CancellationScope") -> "CancellationScope":
        """Link a child scope so parent cancellation cascades (returns child)."""
        self._children.add(scope)
        if self._state.cancelled:
            scope.cancel(self._state.reason)
        return scope

    def child(self, name: Optional[str] = None) -> "CancellationScope":
        """Create and link a child scope (shortcut)."""
        return CancellationScope(name, parent=self)

    def _log_context(self) -> LogContext:
        return LogContext(scope=self._name or ANONYMOUS_SCOPE_NAME, owner=self._owner)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationScope(name={self._name!r}, cancelled={self._state.cancelled}, "
            f"pending={len(self._state.pending_waiters)}, children={len(self._children)})"
        )


__all__ = ["CancellationScope"]
