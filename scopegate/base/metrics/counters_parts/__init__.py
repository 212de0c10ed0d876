"""One-class-per-file counter implementations re-exported by ``metrics.counters``."""

from .gate_counters import GateCounters
from .gate_counters_snapshot import GateCountersSnapshot

__all__ = ["GateCounters", "GateCountersSnapshot"]
