"""Base structured logging utilities for the cancellation core.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across scope, gate and suppressor.

All package loggers are children of the shared ``scopegate`` logger, which owns
a single stderr handler. Level and output mode default to the values resolved
by :func:`scopegate.config.get_gate_settings` (``SCOPEGATE_LOG_LEVEL``,
``SCOPEGATE_LOG_JSON``).
"""
from __future__ import annotations

import logging
import json
import sys
import os
import contextlib
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from ..config import get_gate_settings
from ..config.defaults import LOGGER_NAME, LOG_FILE_BACKUP_COUNT, LOG_FILE_MAX_BYTES
from ..config.env import parse_level
from .log_support import JsonFormatter, LogContext


_BASE_LOGGER_ATTR = "_scopegate_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_scopegate_console_handler"
_FILE_HANDLER_ATTR = "_scopegate_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``scopegate`` logger."""

    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != level:
            logger.setLevel(level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # pytest capture may close the stream we were bound to
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                replacement = logging.StreamHandler(sys.stderr)
                replacement.setLevel(level)
                replacement.setFormatter(_formatter(json_mode))
                setattr(replacement, _CONSOLE_HANDLER_ATTR, True)
                logger.addHandler(replacement)
                continue
            existing.setLevel(level)
            if json_mode != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_formatter(json_mode))
        return logger

    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(
    name: str = LOGGER_NAME,
    json_mode: Optional[bool] = None,
    level: Optional[int] = None,
) -> logging.Logger:
    """Return a package logger, configuring the shared base logger on demand.

    ``json_mode`` and ``level`` default to the resolved gate settings. Child
    names should be dotted below ``scopegate`` (e.g. ``scopegate.gate``) so
    records reach the shared handler.
    """
    settings = get_gate_settings()
    if json_mode is None:
        json_mode = settings.log_json
    if level is None:
        level = parse_level(settings.log_level)
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == LOGGER_NAME:
        return base_logger

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            logger.removeHandler(handler)
            with contextlib.suppress(Exception):
                handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
    logger_name: str = LOGGER_NAME,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (replacing any previously managed one for a different path).
        When ``None``, managed file handlers are removed.
    json_mode: bool
        Formatter choice for the managed file handler.
    logger_name: str
        Name of the logger to configure.

    Notes
    -----
    Handlers attached by callers are left untouched; only handlers tagged by
    this module are replaced or removed.
    """
    logger = get_logger(logger_name)

    if level is not None:
        if isinstance(level, str):
            logger.setLevel(parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed_handlers = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed_handlers:
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed_handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()

    if existing is None:
        fh = RotatingFileHandler(
            abs_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        setattr(fh, _FILE_HANDLER_ATTR, True)
        fh.setLevel(logger.level)
        fh.setFormatter(_formatter(json_mode))
        logger.addHandler(fh)
    else:
        existing.setFormatter(_formatter(json_mode))
        existing.setLevel(logger.level)

    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (normally obtained from ``get_logger``).
    event: str
        Event name (e.g. ``scope.cancel``).
    ctx: LogContext | None
        Scope/owner context; merged shallowly.
    level: int
        Logging level for the record. The payload is only serialized when the
        logger is enabled for ``level``.
    keep_none: bool
        When ``True``, preserve keys whose values are ``None``.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr))


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
