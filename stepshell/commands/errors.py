"""Failures raised by the command engine.

Every failure carries a human-readable message; the agent loop feeds it back
to the model as an observation instead of stopping the run.
"""

from typing import Optional


class CommandError(Exception):
    """Base class for all command execution failures."""


class FilesystemError(CommandError):
    """File or directory creation, write or listing failed."""


class DirectoryNotFound(CommandError):
    """A change-directory target does not exist."""


class UnsupportedPlatformOperation(CommandError):
    """Shell constructs that cannot run safely on this platform's shell."""


class CommandBlocked(CommandError):
    """Command rejected by the configured blacklist."""


class SubprocessFailure(CommandError):
    """Spawn error or nonzero exit of a raw shell command."""

    def __init__(self, message: str, exit_code: Optional[int] = None,
                 stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class SubprocessTimeout(SubprocessFailure):
    """Raw shell command exceeded its time budget and was killed."""
