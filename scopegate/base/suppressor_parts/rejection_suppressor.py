"""Filter keeping cancellation rejections out of unhandled-error reporting.

Only reports whose reason is recognized by
:func:`~scopegate.base.cancellation.is_cancellation` are marked handled. The
check is an identity comparison against the ``CANCELLED`` sentinel; messages,
class names and other look-alike traits are never considered.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ...config import get_gate_settings
from ..cancellation_parts.cancellation_error import is_cancellation
from ..errors_parts.misuse_error import MisuseError
from ..log_support import LogContext
from ..logging import get_logger, log_event
from .rejection_port import UnhandledRejectionPort
from .unhandled_rejection import UnhandledRejection


class RejectionSuppressor:
    """Listener that marks sentinel rejections handled on one port.

    Parameters
    ----------
    port:
        Any object with a callable ``subscribe(listener) -> unsubscribe``.
    verbose:
        Emit one ``suppressor.suppressed`` line per suppressed rejection.
        Defaults to the ``suppressor_verbose`` setting.
    logger:
        Logger for diagnostics; defaults to ``scopegate.suppressor``.
    """

    def __init__(
        self,
        port: UnhandledRejectionPort,
        *,
        verbose: Optional[bool] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if port is None or not callable(getattr(port, "subscribe", None)):
            raise MisuseError(
                f"rejection port must expose subscribe(listener), got {type(port).__name__}",
                "install",
            )
        self._port = port
        self._verbose = get_gate_settings().suppressor_verbose if verbose is None else verbose
        self._logger = logger or get_logger("scopegate.suppressor")
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._suppressed = 0

    @property
    def port(self) -> UnhandledRejectionPort:
        return self._port

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def installed(self) -> bool:
        return self._unsubscribe is not None

    @property
    def suppressed_count(self) -> int:
        """Number of rejections marked handled since construction."""
        return self._suppressed

    def install(self) -> "RejectionSuppressor":
        """Subscribe to the port; calling it again while installed is a no-op."""
        if self._unsubscribe is None:
            self._unsubscribe = self._port.subscribe(self._on_rejection)
            log_event(self._logger, "suppressor.install", level=logging.DEBUG, port=type(self._port).__name__)
        return self

    def uninstall(self) -> None:
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        unsubscribe()
        log_event(self._logger, "suppressor.uninstall", level=logging.DEBUG, suppressed=self._suppressed)

    def _on_rejection(self, rejection: UnhandledRejection) -> None:
        if not is_cancellation(rejection.reason):
            return
        rejection.mark_handled()
        self._suppressed += 1
        if self._verbose:
            log_event(
                self._logger,
                "suppressor.suppressed",
                LogContext(operation=_describe_source(rejection)),
                detail=getattr(rejection.reason, "detail", None),
            )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"RejectionSuppressor(installed={self.installed}, suppressed={self._suppressed})"


def _describe_source(rejection: UnhandledRejection) -> Optional[str]:
    source = rejection.context.get("future") or rejection.context.get("task")
    if source is None:
        return None
    get_name = getattr(source, "get_name", None)
    return get_name() if callable(get_name) else type(source).__name__


__all__ = ["RejectionSuppressor"]
