"""Report of one otherwise-unobserved failure, as delivered by a port."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class UnhandledRejection:
    """An unobserved failure and its handled flag.

    Attributes:
        reason: The terminal failure value (normally the exception instance).
        context: Port-specific details (for asyncio, the exception handler
            context such as ``message`` and ``future``).
        handled: Set by :meth:`mark_handled`; the port forwards the report to
            the normal error path only while this stays ``False``.
    """

    reason: Any
    context: Dict[str, Any] = field(default_factory=dict)
    handled: bool = False

    def mark_handled(self) -> None:
        self.handled = True


__all__ = ["UnhandledRejection"]
