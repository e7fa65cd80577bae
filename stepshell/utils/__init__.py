"""Utility functions and helpers for stepshell."""

from .logging import Logger, logger
from .helpers import (
    is_windows,
    find_posix_shell,
    get_current_context,
    safe_file_write
)

__all__ = [
    "Logger",
    "logger",
    "is_windows",
    "find_posix_shell",
    "get_current_context",
    "safe_file_write",
]
