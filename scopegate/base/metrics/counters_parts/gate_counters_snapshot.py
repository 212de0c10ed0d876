"""Gate counters snapshot dataclass.

Immutable snapshot of a scope's gate outcome counters, designed for
serialization and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GateCountersSnapshot:
    """Immutable point-in-time snapshot of gate outcome counters.

    ``rejected_early`` counts calls refused because the scope was already
    cancelled; ``cancelled`` counts calls that were pending when the scope was
    cancelled; ``discarded`` counts producer results that arrived after
    cancellation and were dropped; ``aborted`` counts calls ended by
    asyncio cancellation of the caller or the producer task, which are not
    failures of the producer.
    """

    scope: Optional[str]
    total: int
    resolved: int
    failed: int
    cancelled: int
    rejected_early: int
    discarded: int
    aborted: int
    in_flight: int
    failure_by_code: Dict[str, int]
    generated_at_ms: int

    def to_dict(self) -> Dict[str, Any]:  # convenience
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["GateCountersSnapshot"]
