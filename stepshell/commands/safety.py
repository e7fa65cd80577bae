"""Checks applied to raw shell commands before they are spawned."""

import re
from typing import Iterable, Optional

from ..utils.helpers import is_windows
from ..utils.logging import logger
from .errors import CommandBlocked, UnsupportedPlatformOperation

# Pipes, command chaining and redirection quote differently under cmd.exe
WINDOWS_UNSUPPORTED_METACHARACTERS = ("|", "&", ">")


class CommandSafetyChecker:
    """Rejects raw shell commands the host cannot or must not run."""

    def __init__(self, blacklisted_commands: Optional[Iterable[str]] = None,
                 windows: Optional[bool] = None):
        """Initialize the checker.

        Args:
            blacklisted_commands: Base command names that are never executed
            windows: Override platform detection (defaults to the host platform)
        """
        self.blacklisted_commands = {str(cmd) for cmd in (blacklisted_commands or [])}
        self.windows = is_windows() if windows is None else windows

    def check(self, command: str) -> None:
        """Raise if ``command`` must not reach a shell."""
        if self.windows and any(char in command for char in WINDOWS_UNSUPPORTED_METACHARACTERS):
            raise UnsupportedPlatformOperation(
                "Complex shell operations not supported on Windows. "
                "Use direct file operations instead."
            )

        command_name = self._extract_command_name(command)
        if command_name in self.blacklisted_commands:
            logger.warning(f"Blacklisted command rejected: {command}")
            raise CommandBlocked(f"Command '{command_name}' is blacklisted")

    def _extract_command_name(self, command: str) -> str:
        """Extract the base command name from a command string."""
        # Remove leading sudo/env/etc.
        clean_command = re.sub(r'^(sudo\s+|env\s+)', '', command.strip())
        parts = clean_command.split()
        return parts[0] if parts else command


def create_safety_checker(blacklisted_commands: Optional[Iterable[str]] = None) -> CommandSafetyChecker:
    """Create a safety checker for the host platform."""
    return CommandSafetyChecker(blacklisted_commands)
