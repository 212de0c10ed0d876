"""Internal state holder for cancellation scopes.

Dataclass used by ``CancellationScope`` to track cancellation status, the
optional diagnostic reason, and the waiters currently registered by gated
calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

RejectFn = Callable[[Any], None]


@dataclass
class ScopeState:
    """Internal state for a cancellation scope."""

    cancelled: bool = False
    reason: Optional[str] = None
    pending_waiters: Dict[int, RejectFn] = field(default_factory=dict)


__all__ = ["ScopeState", "RejectFn"]
