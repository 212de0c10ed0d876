"""Cancellation error type.

Defines the public ``CancellationError`` raised when a gated call is rejected
because its owner's scope was cancelled, and ``is_cancellation`` which
recognizes it by sentinel identity.
"""

from __future__ import annotations

from typing import Any, Optional

from .sentinel import CANCELLED


class CancellationError(RuntimeError):
    """Raised when a gated operation's scope has been cancelled.

    The ``sentinel`` attribute is always the process-wide ``CANCELLED``
    marker; callers only choose the diagnostic ``detail``. Recognition goes
    through :func:`is_cancellation`, which compares that attribute by
    identity, so an unrelated ``RuntimeError("cancelled")`` or a look-alike
    class never qualifies.
    """

    def __init__(self, detail: Optional[str] = None) -> None:
        self.sentinel = CANCELLED
        self.detail = detail
        message = "operation cancelled: owner scope closed"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def is_cancellation(value: Any) -> bool:
    """Return True if ``value`` is the sentinel or an error carrying it."""
    if value is CANCELLED:
        return True
    return isinstance(value, CancellationError) and value.sentinel is CANCELLED


__all__ = ["CancellationError", "is_cancellation"]
