"""Rejection suppressor public surface.

Install once at process start::

    async def main():
        install_rejection_suppressor()
        ...

Cancellation rejections that nobody awaited (e.g. a fire-and-forget task of
an owner that has since been torn down) are then marked handled instead of
being logged as ``Task exception was never retrieved``. Every other failure
still reaches the loop's normal exception handler.
"""

from .suppressor_parts.asyncio_port import AsyncioRejectionPort
from .suppressor_parts.manual_port import ManualRejectionPort
from .suppressor_parts.process_install import (
    get_rejection_suppressor,
    install_rejection_suppressor,
    uninstall_rejection_suppressor,
)
from .suppressor_parts.rejection_port import RejectionListener, UnhandledRejectionPort
from .suppressor_parts.rejection_suppressor import RejectionSuppressor
from .suppressor_parts.unhandled_rejection import UnhandledRejection

__all__ = [
    "AsyncioRejectionPort",
    "ManualRejectionPort",
    "RejectionListener",
    "RejectionSuppressor",
    "UnhandledRejection",
    "UnhandledRejectionPort",
    "get_rejection_suppressor",
    "install_rejection_suppressor",
    "uninstall_rejection_suppressor",
]
