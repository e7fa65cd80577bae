"""Command execution engine for stepshell."""

import os
from typing import Callable, Dict, Optional

from ..constants import DEFAULT_COMMAND_TIMEOUT
from ..utils.logging import logger
from .classifier import CommandIntent, IntentKind, classify
from .context import RunContext
from .errors import CommandError, DirectoryNotFound, FilesystemError, SubprocessFailure
from .process import ManagedProcess
from .safety import CommandSafetyChecker


class CommandExecutor:
    """Classifies model-generated commands and carries them out.

    Recognized filesystem intents are handled in-process; everything else runs
    through the platform shell. Every failure raises a ``CommandError``.
    """

    def __init__(self, default_timeout: float = DEFAULT_COMMAND_TIMEOUT,
                 safety_checker: Optional[CommandSafetyChecker] = None):
        """Initialize command executor.

        Args:
            default_timeout: Timeout for raw shell commands in seconds
            safety_checker: Checks applied before spawning a shell
        """
        self.default_timeout = default_timeout
        self.safety_checker = safety_checker or CommandSafetyChecker()
        self._handlers: Dict[IntentKind, Callable[[CommandIntent, RunContext], str]] = {
            IntentKind.FILE_CREATE: self.create_file,
            IntentKind.DIRECTORY_CREATE: self.create_directory,
            IntentKind.LIST: self.list_directory,
            IntentKind.PRINT_WORKING_DIRECTORY: self.print_working_directory,
            IntentKind.CHANGE_DIRECTORY: self.change_directory,
            IntentKind.RAW_SHELL: self.run_shell,
        }

    def execute(self, command: str, context: RunContext) -> str:
        """Execute a command string within a run context.

        Args:
            command: Command text produced by the model
            context: Run state holding the working directory

        Returns:
            Result text for the model

        Raises:
            CommandError: with a descriptive message on any failure
        """
        intent = classify(command)
        logger.command(f"Executing ({intent.kind.value}): {command}")
        try:
            result = self._handlers[intent.kind](intent, context)
        except CommandError as e:
            logger.debug(f"Command failed: {e}")
            raise
        logger.debug(f"Command result:\n{result}")
        return result

    def create_file(self, intent: CommandIntent, context: RunContext) -> str:
        try:
            target = context.resolve(intent.path)
            target.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the decoded content byte-for-byte
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(intent.content)
        except (OSError, ValueError) as e:
            raise FilesystemError(f"Failed to create file: {e}") from e
        return f"File created successfully: {intent.path}"

    def create_directory(self, intent: CommandIntent, context: RunContext) -> str:
        try:
            target = context.resolve(intent.path)
            if target.is_dir():
                return f"Directory already exists: {intent.path}"
            target.mkdir(parents=True)
        except (OSError, ValueError) as e:
            raise FilesystemError(f"Failed to create directory: {e}") from e
        return f"Directory created: {intent.path}"

    def list_directory(self, intent: CommandIntent, context: RunContext) -> str:
        try:
            entries = sorted(os.listdir(context.cwd))
        except OSError as e:
            raise FilesystemError(f"Failed to list directory: {e}") from e
        return "\n".join(entries)

    def print_working_directory(self, intent: CommandIntent, context: RunContext) -> str:
        return str(context.cwd)

    def change_directory(self, intent: CommandIntent, context: RunContext) -> str:
        if not intent.target:
            raise DirectoryNotFound(f"Directory not found: {intent.target}")
        try:
            target = context.resolve(intent.target)
            exists, is_dir = target.exists(), target.is_dir()
        except (OSError, ValueError) as e:
            raise FilesystemError(f"Failed to change directory: {e}") from e
        if not exists:
            raise DirectoryNotFound(f"Directory not found: {intent.target}")
        if not is_dir:
            raise FilesystemError(f"Failed to change directory: not a directory: {intent.target}")
        context.cwd = target
        return f"Changed directory to: {context.cwd}"

    def run_shell(self, intent: CommandIntent, context: RunContext,
                  timeout: Optional[float] = None) -> str:
        self.safety_checker.check(intent.raw)
        result = ManagedProcess(
            intent.raw,
            cwd=context.cwd,
            timeout=self.default_timeout if timeout is None else timeout,
        ).run()
        logger.debug(f"Command completed with exit code {result.exit_code}")
        if result.exit_code != 0:
            raise SubprocessFailure(
                f"Command failed with code {result.exit_code}:\n{result.output}",
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result.output


def create_command_executor(timeout: float = DEFAULT_COMMAND_TIMEOUT,
                            safety_checker: Optional[CommandSafetyChecker] = None) -> CommandExecutor:
    """Create a command executor with the specified default timeout."""
    return CommandExecutor(timeout, safety_checker)
