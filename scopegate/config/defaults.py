"""scopegate.config.defaults
=========================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or an external
configuration file, but provide sensible fallbacks for local development and
tests.

This module intentionally avoids importing from other scopegate packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Logging ----
# Name of the shared package logger; child loggers hang below it.
LOGGER_NAME = "scopegate"
# Default level name applied to the shared logger.
DEFAULT_LOG_LEVEL = "INFO"
# JSON lines by default; plain text formatter otherwise.
DEFAULT_LOG_JSON = True
# Rotating file handler limits used by ``configure_logger`` (10MB x 5 backups).
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5


# ---- Rejection suppressor ----
# Emit one diagnostic line per suppressed cancellation rejection when enabled.
DEFAULT_SUPPRESSOR_VERBOSE = False


# ---- Scopes ----
# Label used in log events for scopes created without a name.
ANONYMOUS_SCOPE_NAME = "anonymous"
