"""Gate outcome counters.

Re-exports the implementations under ``metrics/counters_parts`` to keep a
stable import surface.
"""

from .counters_parts import GateCounters, GateCountersSnapshot

__all__ = ["GateCounters", "GateCountersSnapshot"]
