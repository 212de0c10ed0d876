"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `scopegate.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .misuse_error import MisuseError
from .classification import classify_exception

__all__ = ["ErrorCode", "MisuseError", "classify_exception"]
