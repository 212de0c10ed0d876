"""scopegate.config.env
====================

Environment variable names and small parsing helpers.

Failure Modes
-------------
- Parsers never raise on malformed values; they fall back to the provided
  default so a typo in the environment cannot break import of the package.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

ENV_LOG_LEVEL = "SCOPEGATE_LOG_LEVEL"
ENV_LOG_JSON = "SCOPEGATE_LOG_JSON"
ENV_SUPPRESSOR_VERBOSE = "SCOPEGATE_SUPPRESSOR_VERBOSE"
ENV_CONFIG_FILE = "SCOPEGATE_CONFIG_FILE"

# Settings field -> environment variable
ENV_MAP: Dict[str, str] = {
    "log_level": ENV_LOG_LEVEL,
    "log_json": ENV_LOG_JSON,
    "suppressor_verbose": ENV_SUPPRESSOR_VERBOSE,
}

LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_TRUTHY = frozenset(("1", "true", "yes", "on"))
_FALSY = frozenset(("0", "false", "no", "off"))


def parse_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into an integer constant.

    Accepts common names (DEBUG, INFO, WARN/WARNING, ERROR, CRITICAL)
    case-insensitively, or an int which is returned as-is. Falls back to
    ``default`` on unknown values.
    """
    if isinstance(value, int):
        return value
    if not value:
        return default
    return LEVELS.get(value.strip().upper(), default)


def parse_bool(value: Optional[str], default: Optional[bool]) -> Optional[bool]:
    """Parse a boolean-ish environment value (1/0, true/false, yes/no, on/off)."""
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def read_env_overrides() -> Dict[str, str]:
    """Return the raw settings overrides present in the process environment."""
    out: Dict[str, str] = {}
    for field_name, env_name in ENV_MAP.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw.strip():
            out[field_name] = raw.strip()
    return out


__all__ = [
    "ENV_LOG_LEVEL",
    "ENV_LOG_JSON",
    "ENV_SUPPRESSOR_VERBOSE",
    "ENV_CONFIG_FILE",
    "ENV_MAP",
    "LEVELS",
    "parse_level",
    "parse_bool",
    "read_env_overrides",
]
