"""Validated runtime settings for the cancellation core.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes
-------------
- In-code overrides with invalid values raise ``pydantic.ValidationError``.
  Environment and file sources are sanitized before validation by
  :func:`scopegate.config.get_gate_settings`.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from .defaults import DEFAULT_LOG_JSON, DEFAULT_LOG_LEVEL, DEFAULT_SUPPRESSOR_VERBOSE
from .env import LEVELS


class GateSettings(BaseModel):
    """Runtime settings for logging and the rejection suppressor.

    Attributes
    ----------
    log_level:
        Level name for the shared ``scopegate`` logger (e.g. ``"DEBUG"``).
    log_json:
        Emit JSON lines (default) instead of plain text.
    suppressor_verbose:
        Emit one diagnostic line per suppressed cancellation rejection.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = DEFAULT_LOG_JSON
    suppressor_verbose: bool = DEFAULT_SUPPRESSOR_VERBOSE

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        if not isinstance(value, str) or value.strip().upper() not in LEVELS:
            raise ValueError(f"unknown log level: {value!r}")
        return value.strip().upper()


__all__ = ["GateSettings"]
