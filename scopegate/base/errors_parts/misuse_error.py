"""
Structured misuse error exception type.

Raised at the call site when the package is driven incorrectly (a gated call
without a scope, a non-awaitable producer, a suppressor bound to an invalid
port). Misuse is never swallowed or converted into a cancellation.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode


@dataclass
class MisuseError(Exception):
    """Represents an invalid call into the cancellation core.

    Attributes:
        message: Human-readable description of the misuse.
        operation: Name of the public operation that rejected the call
            (e.g., ``"wrap"``, ``"register"``, ``"install"``).
        code: Always :attr:`ErrorCode.MISUSE`; present for uniform handling
            alongside classified errors.
    """

    message: str
    operation: str
    code: ErrorCode = ErrorCode.MISUSE

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining operation, code, and message."""
        return f"{self.operation} {self.code.value}: {self.message}"


__all__ = ["MisuseError"]
