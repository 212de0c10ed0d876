"""Owner-scoped cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``scopegate.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationScope`` is created once per owner and cancelled at teardown.
- ``CANCELLED`` is the sentinel carried by every cancellation rejection.
- ``CancellationError`` is raised by gated calls rejected through a scope.
"""

from .cancellation_parts.sentinel import CANCELLED
from .cancellation_parts.cancellation_error import CancellationError, is_cancellation
from .cancellation_parts.cancellation_scope import CancellationScope

__all__ = ["CANCELLED", "CancellationError", "CancellationScope", "is_cancellation"]
