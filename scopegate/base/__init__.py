"""
scopegate base package

Host-independent core of the cancellation mechanism:
- Cancellation: per-owner ``CancellationScope`` and the ``CANCELLED`` sentinel
- Gate: ``wrap`` / ``OperationGate`` filtering producer settlement through a scope
- Suppressor: ``RejectionSuppressor`` keeping cancellation out of unhandled-error reporting
- Errors, structured logging and per-scope counters shared by the above

Nothing here imports ``scopegate.lifecycle``.
"""

from .cancellation import CANCELLED, CancellationError, CancellationScope, is_cancellation
from .errors import ErrorCode, MisuseError, classify_exception
from .gate import HandleState, OperationGate, OperationHandle, gated, wrap
from .metrics import GateCounters, GateCountersSnapshot
from .suppressor import (
    AsyncioRejectionPort,
    ManualRejectionPort,
    RejectionSuppressor,
    UnhandledRejection,
    UnhandledRejectionPort,
    get_rejection_suppressor,
    install_rejection_suppressor,
    uninstall_rejection_suppressor,
)

__all__ = [
    # Cancellation
    "CANCELLED",
    "CancellationError",
    "CancellationScope",
    "is_cancellation",
    # Errors
    "ErrorCode",
    "MisuseError",
    "classify_exception",
    # Gate
    "HandleState",
    "OperationGate",
    "OperationHandle",
    "gated",
    "wrap",
    # Metrics
    "GateCounters",
    "GateCountersSnapshot",
    # Suppressor
    "AsyncioRejectionPort",
    "ManualRejectionPort",
    "RejectionSuppressor",
    "UnhandledRejection",
    "UnhandledRejectionPort",
    "get_rejection_suppressor",
    "install_rejection_suppressor",
    "uninstall_rejection_suppressor",
]
