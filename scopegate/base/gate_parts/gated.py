"""Decorator routing an async method's result through its owner's scope."""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

from .operation_gate import wrap

T = TypeVar("T")


def gated(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Gate every call of an async method through ``self.scope``.

    The method body is passed as a factory, so once the owner's scope is
    cancelled further calls reject without creating the coroutine at all.
    An instance without a ``scope`` attribute raises ``MisuseError``.
    """

    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        return await wrap(
            getattr(self, "scope", None),
            lambda: method(self, *args, **kwargs),
        )

    return wrapper


__all__ = ["gated"]
