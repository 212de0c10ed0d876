"""Cancellation sentinel.

``CANCELLED`` is the single value that identifies a cancellation-induced
rejection. It is compared by identity only; copies and unpickled references
resolve back to the same object.
"""

from __future__ import annotations


class _Sentinel:
    """Immutable named marker with identity-preserving copy/pickle."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key, value):
        raise AttributeError(f"{self._name} is immutable")

    def __repr__(self) -> str:
        return self._name

    def __copy__(self) -> "_Sentinel":
        return self

    def __deepcopy__(self, memo) -> "_Sentinel":
        return self

    def __reduce__(self) -> str:
        # Resolved as a module global on unpickle, so identity survives.
        return "CANCELLED"


CANCELLED = _Sentinel("scopegate.CANCELLED")


__all__ = ["CANCELLED"]
