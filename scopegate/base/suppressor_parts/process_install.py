"""Process-wide installation of the rejection suppressor.

One suppressor is active per process. A second
``install_rejection_suppressor`` call returns the active instance without
subscribing again. The exception is a suppressor on the default asyncio port
whose loop is no longer the running one (a later ``asyncio.run``, a worker
thread's loop): it is moved onto the running loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..errors_parts.misuse_error import MisuseError
from ..logging import get_logger, log_event
from .asyncio_port import AsyncioRejectionPort
from .rejection_port import UnhandledRejectionPort
from .rejection_suppressor import RejectionSuppressor

_logger = get_logger("scopegate.suppressor")
_ACTIVE: Optional[RejectionSuppressor] = None


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _bound_elsewhere(active: RejectionSuppressor, loop: asyncio.AbstractEventLoop) -> bool:
    port = active.port
    if not isinstance(port, AsyncioRejectionPort):
        return False
    return port.loop is not loop or port.loop.is_closed()


def install_rejection_suppressor(
    port: Optional[UnhandledRejectionPort] = None,
    *,
    verbose: Optional[bool] = None,
) -> RejectionSuppressor:
    """Install the process-wide suppressor and return it.

    With ``port=None`` the suppressor taps the running event loop through an
    :class:`AsyncioRejectionPort`; calling it outside a running loop raises
    ``MisuseError`` unless a suppressor is already active.
    """
    global _ACTIVE  # noqa: PLW0603 - process-wide singleton
    loop = _running_loop() if port is None else None
    if _ACTIVE is not None:
        if loop is None or not _bound_elsewhere(_ACTIVE, loop):
            log_event(_logger, "suppressor.already_installed", level=logging.DEBUG)
            return _ACTIVE
        stale, _ACTIVE = _ACTIVE, None
        if verbose is None:
            verbose = stale.verbose
        stale.uninstall()
        log_event(_logger, "suppressor.rebind", level=logging.DEBUG)
    if port is None:
        if loop is None:
            raise MisuseError(
                "no running event loop; pass an explicit port or install from inside the loop",
                "install",
            )
        port = AsyncioRejectionPort(loop)
    _ACTIVE = RejectionSuppressor(port, verbose=verbose).install()
    return _ACTIVE


def uninstall_rejection_suppressor() -> None:
    """Remove the process-wide suppressor, if any."""
    global _ACTIVE  # noqa: PLW0603
    if _ACTIVE is None:
        return
    active, _ACTIVE = _ACTIVE, None
    active.uninstall()


def get_rejection_suppressor() -> Optional[RejectionSuppressor]:
    return _ACTIVE


__all__ = [
    "install_rejection_suppressor",
    "uninstall_rejection_suppressor",
    "get_rejection_suppressor",
]
