"""Unified gate error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``scopegate.base.errors_parts`` to maintain a stable import path.

Taxonomy
--------
- ``CancellationError``: synthetic, carries the ``CANCELLED`` sentinel.
- Operation failures: the producer's own exception, propagated unchanged.
- ``MisuseError``: invalid calls, raised at the call site.
"""

from .cancellation_parts.cancellation_error import CancellationError, is_cancellation
from .errors_parts.error_code import ErrorCode
from .errors_parts.misuse_error import MisuseError
from .errors_parts.classification import classify_exception

__all__ = [
    "CancellationError",
    "ErrorCode",
    "MisuseError",
    "classify_exception",
    "is_cancellation",
]
