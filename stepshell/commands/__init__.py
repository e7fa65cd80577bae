"""Command classification, execution and safety for stepshell."""

from .classifier import CommandIntent, IntentKind, classify, decode_escapes
from .context import RunContext, create_run_context
from .errors import (
    CommandError,
    FilesystemError,
    DirectoryNotFound,
    UnsupportedPlatformOperation,
    CommandBlocked,
    SubprocessFailure,
    SubprocessTimeout,
)
from .executor import CommandExecutor, create_command_executor
from .process import ManagedProcess, ProcessResult
from .safety import CommandSafetyChecker, create_safety_checker

__all__ = [
    "CommandIntent",
    "IntentKind",
    "classify",
    "decode_escapes",
    "RunContext",
    "create_run_context",
    "CommandError",
    "FilesystemError",
    "DirectoryNotFound",
    "UnsupportedPlatformOperation",
    "CommandBlocked",
    "SubprocessFailure",
    "SubprocessTimeout",
    "CommandExecutor",
    "create_command_executor",
    "ManagedProcess",
    "ProcessResult",
    "CommandSafetyChecker",
    "create_safety_checker",
]
