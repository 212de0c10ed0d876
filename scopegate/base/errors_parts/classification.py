"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

The gate propagates producer failures unchanged; classification only feeds
counters and log fields so dashboards can tell cancellations apart from
genuine operation failures.
"""
from __future__ import annotations

import asyncio

from ..cancellation_parts.cancellation_error import is_cancellation
from .error_code import ErrorCode
from .misuse_error import MisuseError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. Sentinel-carrying cancellation (identity check only).
        2. MisuseError passthrough.
        3. Timeout exceptions (sync/async).
        4. Any other ``Exception`` is an operation failure.
        5. ``UNKNOWN`` fallback (e.g. ``asyncio.CancelledError``).
    """
    if is_cancellation(exc):
        return ErrorCode.CANCELLED
    if isinstance(exc, MisuseError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, Exception):
        return ErrorCode.OPERATION
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
