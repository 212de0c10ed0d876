"""In-memory counters for gated calls issued under one scope.

Attach an instance to a :class:`~scopegate.base.cancellation.CancellationScope`
(``CancellationScope(counters=GateCounters())``) and the gate records every
outcome on it.
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, Optional
import time

from .gate_counters_snapshot import GateCountersSnapshot


class GateCounters:
    """Thread-safe in-memory counters for gated calls."""

    __slots__ = (
        "_scope",
        "_lock",
        "_total",
        "_resolved",
        "_failed",
        "_cancelled",
        "_rejected_early",
        "_discarded",
        "_aborted",
        "_in_flight",
        "_failure_by_code",
    )

    def __init__(self, scope: Optional[str] = None):
        self._scope = scope
        self._lock = RLock()
        self._total = 0
        self._resolved = 0
        self._failed = 0
        self._cancelled = 0
        self._rejected_early = 0
        self._discarded = 0
        self._aborted = 0
        self._in_flight = 0
        self._failure_by_code: Dict[str, int] = {}

    # -------------------------- Static Helpers -------------------------- #
    @staticmethod
    def monotonic_ms() -> int:
        """Return current monotonic time in milliseconds."""
        return int(time.monotonic() * 1000)

    # -------------------------- Record Methods -------------------------- #
    def record_start(self) -> None:
        """Record a gated call entering the pending state."""
        with self._lock:
            self._total += 1
            self._in_flight += 1

    def record_rejected_early(self) -> None:
        """Record a call refused because the scope was already cancelled."""
        with self._lock:
            self._total += 1
            self._rejected_early += 1

    def record_resolved(self) -> None:
        with self._lock:
            self._resolved += 1
            self._in_flight = max(0, self._in_flight - 1)

    def record_failed(self, error_code: str) -> None:
        """Record a producer failure propagated to the caller.

        Args:
            error_code: Canonical error code string.
        """
        with self._lock:
            self._failed += 1
            self._failure_by_code[error_code] = self._failure_by_code.get(error_code, 0) + 1
            self._in_flight = max(0, self._in_flight - 1)

    def record_cancelled(self) -> None:
        """Record a pending call rejected by scope cancellation."""
        with self._lock:
            self._cancelled += 1
            self._in_flight = max(0, self._in_flight - 1)

    def record_discarded(self) -> None:
        """Record a late producer outcome dropped after cancellation."""
        with self._lock:
            self._discarded += 1

    def record_aborted(self) -> None:
        """Record a call abandoned through asyncio cancellation (caller or producer task)."""
        with self._lock:
            self._aborted += 1
            self._in_flight = max(0, self._in_flight - 1)

    # -------------------------- Snapshot -------------------------- #
    def snapshot(self) -> GateCountersSnapshot:
        """Return an immutable copy of the current counters."""
        with self._lock:
            return GateCountersSnapshot(
                scope=self._scope,
                total=self._total,
                resolved=self._resolved,
                failed=self._failed,
                cancelled=self._cancelled,
                rejected_early=self._rejected_early,
                discarded=self._discarded,
                aborted=self._aborted,
                in_flight=self._in_flight,
                failure_by_code=dict(self._failure_by_code),
                generated_at_ms=self.monotonic_ms(),
            )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"GateCounters(scope={self._scope!r}, total={self._total}, "
            f"in_flight={self._in_flight}, cancelled={self._cancelled})"
        )


__all__ = ["GateCounters"]
