"""Metrics public surface."""

from .counters import GateCounters, GateCountersSnapshot

__all__ = ["GateCounters", "GateCountersSnapshot"]
