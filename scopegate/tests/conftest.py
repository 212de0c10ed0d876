"""Shared fixtures for scopegate tests.

Resets process-wide state (active suppressor, cached settings) around every
test and provides a list-backed log handler.
"""
from __future__ import annotations

import logging
from typing import List

import pytest

from scopegate.base.suppressor import uninstall_rejection_suppressor
from scopegate.config import reset_gate_settings_cache
from scopegate.config.env import ENV_CONFIG_FILE, ENV_MAP


class ListHandler(logging.Handler):
    """Capture formatted messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    for name in (ENV_CONFIG_FILE, *ENV_MAP.values()):
        monkeypatch.delenv(name, raising=False)
    reset_gate_settings_cache()
    yield
    uninstall_rejection_suppressor()
    reset_gate_settings_cache()


@pytest.fixture()
def list_logger():
    """Return ``(logger, handler)`` for a private, non-propagating DEBUG logger."""
    logger = logging.getLogger("scopegate_tests.capture")
    handler = ListHandler()
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        yield logger, handler
    finally:
        logger.handlers[:] = []
