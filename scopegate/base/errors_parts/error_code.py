"""
Normalized gate error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the gate, the scope counters and
structured logging. Values are lowercase snake_case and are considered a stable
public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CANCELLED = "cancelled"
    OPERATION = "operation"
    TIMEOUT = "timeout"
    MISUSE = "misuse"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
