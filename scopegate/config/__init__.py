"""Unified configuration layer for scopegate.

Sources are merged in a predictable order:
    1. Built-in defaults (``scopegate.config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``SCOPEGATE_CONFIG_FILE``
    3. Environment variables (``SCOPEGATE_LOG_LEVEL``, ``SCOPEGATE_LOG_JSON``,
       ``SCOPEGATE_SUPPRESSOR_VERBOSE``)
    4. In-code overrides passed to :func:`get_gate_settings`

External config file example (YAML)::

    scopegate:
      log_level: DEBUG
      suppressor_verbose: true

The top-level ``scopegate`` key is optional; a flat mapping is accepted too.

Public API
----------
* get_gate_settings(overrides: dict | None = None) -> GateSettings
* reset_gate_settings_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .env import ENV_CONFIG_FILE, ENV_MAP, parse_bool, read_env_overrides, LEVELS
from .settings import GateSettings

_CACHED: Optional[GateSettings] = None
# Snapshot of the env inputs the cache was computed from; a change refreshes it.
_ENV_GUARD: Optional[Tuple[str, ...]] = None

_BOOL_FIELDS = ("log_json", "suppressor_verbose")


def _env_guard() -> Tuple[str, ...]:
    names = (ENV_CONFIG_FILE, *ENV_MAP.values())
    return tuple(os.environ.get(n, "") for n in names)


def _load_config_file(path: str) -> Dict[str, Any]:
    """Load a JSON or YAML settings file; missing or unreadable files yield ``{}``."""
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return {}
    if not isinstance(data, dict):
        return {}
    section = data.get("scopegate", data)
    return dict(section) if isinstance(section, dict) else {}


def _sanitize(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unknown keys and unparseable values from file/env sources."""
    out: Dict[str, Any] = {}
    level = raw.get("log_level")
    if isinstance(level, str) and level.strip().upper() in LEVELS:
        out["log_level"] = level.strip().upper()
    for name in _BOOL_FIELDS:
        value = raw.get(name)
        if isinstance(value, bool):
            out[name] = value
        elif isinstance(value, str):
            parsed = parse_bool(value, default=None)
            if parsed is not None:
                out[name] = parsed
    return out


def get_gate_settings(overrides: Optional[Dict[str, Any]] = None) -> GateSettings:
    """Return resolved settings.

    Without ``overrides`` the result is cached until one of the relevant
    environment variables changes. With ``overrides`` a fresh, uncached
    instance is built and validated strictly.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = _env_guard()
    if overrides is None and _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    merged: Dict[str, Any] = {}
    config_path = os.environ.get(ENV_CONFIG_FILE)
    if config_path:
        merged.update(_sanitize(_load_config_file(config_path)))
    merged.update(_sanitize(read_env_overrides()))
    if overrides:
        merged.update(overrides)
        return GateSettings(**merged)

    _CACHED = GateSettings(**merged)
    _ENV_GUARD = guard
    return _CACHED


def reset_gate_settings_cache() -> None:
    """Forget cached settings (tests and long-lived hosts reloading config)."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603
    _CACHED = None
    _ENV_GUARD = None


__all__ = ["GateSettings", "get_gate_settings", "reset_gate_settings_cache"]
