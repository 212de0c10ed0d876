"""In-process rejection port fed explicitly by its host.

Useful for hosts that own their error channel (worker supervisors, job
runners) and for exercising the suppressor without a global handler.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .rejection_port import RejectionListener
from .unhandled_rejection import UnhandledRejection


class ManualRejectionPort:
    """UnhandledRejectionPort whose reports come from :meth:`report`.

    Reports no listener marks handled are appended to ``unhandled``, which
    stands in for the host's normal error-reporting path.
    """

    def __init__(self) -> None:
        self._listeners: List[RejectionListener] = []
        self.unhandled: List[UnhandledRejection] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: RejectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def report(self, reason: Any, context: Optional[Dict[str, Any]] = None) -> UnhandledRejection:
        """Deliver one report to the listeners and return it."""
        rejection = UnhandledRejection(reason=reason, context=dict(context or {}))
        for listener in list(self._listeners):
            listener(rejection)
            if rejection.handled:
                break
        if not rejection.handled:
            self.unhandled.append(rejection)
        return rejection


__all__ = ["ManualRejectionPort"]
