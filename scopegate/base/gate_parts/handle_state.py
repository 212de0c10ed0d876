"""Terminal-state enumeration for a single gated call."""

from __future__ import annotations

from enum import Enum


class HandleState(str, Enum):
    """Lifecycle of one :class:`OperationHandle`.

    ``PENDING`` moves to exactly one of the other values and never leaves it.
    ``ABORTED`` covers asyncio-level cancellation of the caller or the
    producer task, which is distinct from scope cancellation.
    """

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"
    CANCELLED = "cancelled"
    ABORTED = "aborted"


__all__ = ["HandleState"]
