"""scopegate package

Owner-scoped cancellation for chains of asyncio operations.

An owner (component, job, request handler) creates one
:class:`CancellationScope`, issues its async calls through :func:`wrap`, and
cancels the scope at teardown. Pending and later calls then raise
:class:`CancellationError` carrying the :data:`CANCELLED` sentinel instead of
delivering results into a destroyed context, and the process-wide
:class:`RejectionSuppressor` keeps those rejections out of unhandled-error
reports.

Public API (re-exported):
    - Version: ``__version__``
    - Core: ``CancellationScope``, ``wrap``, ``OperationGate``, ``gated``
    - Sentinel: ``CANCELLED``, ``is_cancellation``
    - Errors: ``CancellationError``, ``MisuseError``, ``ErrorCode``
    - Suppressor: ``install_rejection_suppressor``, ``RejectionSuppressor``,
      ``AsyncioRejectionPort``, ``ManualRejectionPort``
    - Lifecycle: ``ScopedOwner``, ``owned_scope``, ``bind_teardown``,
      ``OneShotTeardownSignal``
    - Config: ``GateSettings``, ``get_gate_settings``
"""

from .base import (
    CANCELLED,
    AsyncioRejectionPort,
    CancellationError,
    CancellationScope,
    ErrorCode,
    GateCounters,
    ManualRejectionPort,
    MisuseError,
    OperationGate,
    RejectionSuppressor,
    UnhandledRejection,
    UnhandledRejectionPort,
    classify_exception,
    gated,
    get_rejection_suppressor,
    install_rejection_suppressor,
    is_cancellation,
    uninstall_rejection_suppressor,
    wrap,
)
from .config import GateSettings, get_gate_settings
from .lifecycle import OneShotTeardownSignal, ScopedOwner, TeardownSignal, bind_teardown, owned_scope

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CANCELLED",
    "AsyncioRejectionPort",
    "CancellationError",
    "CancellationScope",
    "ErrorCode",
    "GateCounters",
    "GateSettings",
    "ManualRejectionPort",
    "MisuseError",
    "OneShotTeardownSignal",
    "OperationGate",
    "RejectionSuppressor",
    "ScopedOwner",
    "TeardownSignal",
    "UnhandledRejection",
    "UnhandledRejectionPort",
    "bind_teardown",
    "classify_exception",
    "gated",
    "get_gate_settings",
    "get_rejection_suppressor",
    "install_rejection_suppressor",
    "is_cancellation",
    "owned_scope",
    "uninstall_rejection_suppressor",
    "wrap",
]
