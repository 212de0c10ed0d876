"""UnhandledRejectionPort Protocol (single-class module).

The host runtime's global error-reporting channel as seen by the suppressor.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from .unhandled_rejection import UnhandledRejection

RejectionListener = Callable[[UnhandledRejection], None]


@runtime_checkable
class UnhandledRejectionPort(Protocol):
    """Source of unhandled-rejection reports.

    Implementations call every subscribed listener with the same
    :class:`UnhandledRejection` and forward it to their normal reporting path
    only if no listener marked it handled.
    """

    def subscribe(self, listener: RejectionListener) -> Callable[[], None]:  # pragma: no cover - interface
        """Register ``listener`` and return a callable that unsubscribes it."""
        ...


__all__ = ["UnhandledRejectionPort", "RejectionListener"]
