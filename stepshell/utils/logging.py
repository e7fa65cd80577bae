"""Colored console logging for stepshell.

Every line is prefixed with a timestamp and a level tag. Protocol steps get a
level of their own so a run reads as a transcript of think, action, observe
and output lines.
"""

import sys
import datetime
from typing import Optional, TextIO

from ..constants import (
    CLR_RESET, CLR_CYAN, CLR_BOLD_CYAN, CLR_GREEN, CLR_BOLD_GREEN,
    CLR_MAGENTA, CLR_BOLD_MAGENTA, CLR_BLUE, CLR_BOLD_BLUE,
    CLR_YELLOW, CLR_BOLD_YELLOW, CLR_WHITE, CLR_BOLD_WHITE,
    CLR_RED, CLR_BOLD_RED
)

# (tag color, message color) per level
LEVEL_COLORS = {
    "System": (CLR_CYAN, CLR_BOLD_CYAN),
    "User": (CLR_GREEN, CLR_BOLD_GREEN),
    "Think": (CLR_MAGENTA, CLR_BOLD_MAGENTA),
    "Action": (CLR_BLUE, CLR_BOLD_BLUE),
    "Observe": (CLR_CYAN, CLR_BOLD_CYAN),
    "Output": (CLR_GREEN, CLR_BOLD_GREEN),
    "Command": (CLR_YELLOW, CLR_BOLD_YELLOW),
    "Error": (CLR_RED, CLR_BOLD_RED),
    "Warning": (CLR_YELLOW, CLR_BOLD_YELLOW),
    "Debug": (CLR_WHITE, CLR_BOLD_WHITE),
}

STDERR_LEVELS = frozenset({"Error", "Warning"})


class Logger:
    """Process-wide console logger; debug lines are dropped unless enabled."""

    def __init__(self, debug_enabled: bool = False,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.debug_enabled = debug_enabled
        # None means "whatever sys.stdout/sys.stderr is at write time"
        self._out = out
        self._err = err

    def set_debug(self, enabled: bool) -> None:
        """Enable or disable debug logging."""
        self.debug_enabled = enabled

    def _stream(self, level: str) -> TextIO:
        if level in STDERR_LEVELS:
            return self._err or sys.stderr
        return self._out or sys.stdout

    def log_message(self, level: str, message: str) -> None:
        """Write ``message`` under ``level``; continuation lines are indented under the first."""
        if level == "Debug" and not self.debug_enabled:
            return

        # Lone surrogates in model output cannot be encoded by any stream
        message = message.encode("utf-8", errors="replace").decode("utf-8")
        tag_color, text_color = LEVEL_COLORS.get(level, (CLR_WHITE, CLR_BOLD_WHITE))
        prefix = f"[{datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}] [{level}]: "
        stream = self._stream(level)

        first, *rest = message.splitlines() or [""]
        print(f"{tag_color}{prefix}{CLR_RESET}{text_color}{first}{CLR_RESET}", file=stream)
        padding = " " * len(prefix)
        for line in rest:
            print(f"{padding}{text_color}{line}{CLR_RESET}", file=stream)
        stream.flush()

    def step(self, kind: str, message: str) -> None:
        """Log a protocol step (think, action, observe or output)."""
        self.log_message(kind.capitalize(), message)

    def system(self, message: str) -> None:
        self.log_message("System", message)

    def user(self, message: str) -> None:
        self.log_message("User", message)

    def command(self, message: str) -> None:
        self.log_message("Command", message)

    def error(self, message: str) -> None:
        self.log_message("Error", message)

    def warning(self, message: str) -> None:
        self.log_message("Warning", message)

    def debug(self, message: str) -> None:
        self.log_message("Debug", message)


# Global logger instance (debug setting is applied by the application)
logger = Logger()
