"""Subprocess lifecycle for raw shell commands: spawn, drain, time out, reap."""

import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..utils.helpers import find_posix_shell, is_windows
from ..utils.logging import logger
from .errors import SubprocessFailure, SubprocessTimeout

# Seconds to wait for the pipes to close once the command has been killed
KILL_GRACE_SECONDS = 2.0


@dataclass
class ProcessResult:
    """Exit status and captured streams of a finished process."""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """Both streams in the form fed back to the model."""
        return f"stdout: {self.stdout}\nstderr: {self.stderr}"


def shell_argv(command: str, windows: Optional[bool] = None) -> List[str]:
    """Build the argument vector running ``command`` as one shell argument."""
    if is_windows() if windows is None else windows:
        return ["cmd.exe", "/c", command]
    return [find_posix_shell() or "/bin/bash", "-c", command]


class ManagedProcess:
    """One shell command run to completion under a hard timeout."""

    def __init__(self, command: str, cwd: Path, timeout: float,
                 kill_grace: float = KILL_GRACE_SECONDS):
        self.command = command
        self.cwd = cwd
        self.timeout = timeout
        self.kill_grace = kill_grace
        self.windows = is_windows()

    def run(self) -> ProcessResult:
        """Run the command and wait for it.

        Raises:
            SubprocessFailure: the shell could not be started
            SubprocessTimeout: the command outlived ``timeout`` and was killed
        """
        argv = shell_argv(self.command, self.windows)
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=str(self.cwd),
                text=True,
                encoding="utf-8",
                errors="replace",
                # Own process group so the whole tree can be killed on timeout
                start_new_session=not self.windows,
            )
        except (OSError, ValueError) as e:
            raise SubprocessFailure(f"Failed to execute command: {e}") from e

        try:
            stdout, stderr = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            self._kill(process)
            stdout, stderr = self._drain_after_kill(process)
            logger.warning(f"Command timed out after {self.timeout} seconds: {self.command}")
            raise SubprocessTimeout(
                f"Command timed out after {self.timeout} seconds",
                exit_code=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return ProcessResult(exit_code=process.returncode, stdout=stdout or "", stderr=stderr or "")

    def _drain_after_kill(self, process: subprocess.Popen) -> Tuple[str, str]:
        """Collect what is left of the output without waiting on escaped descendants."""
        try:
            stdout, stderr = process.communicate(timeout=self.kill_grace)
            return stdout or "", stderr or ""
        except subprocess.TimeoutExpired as e:
            expired = e

        # Something outside the killed group still holds the pipes open
        logger.debug("Output pipes still open after kill, abandoning them")
        if not self.windows:
            for pipe in (process.stdout, process.stderr):
                if pipe is not None:
                    pipe.close()
        process.wait()
        return _partial(expired.stdout), _partial(expired.stderr)

    def _kill(self, process: subprocess.Popen) -> None:
        if self.windows:
            # taskkill /T takes the children of cmd.exe down as well
            try:
                subprocess.run(
                    ["taskkill", "/F", "/T", "/PID", str(process.pid)],
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
            except OSError as e:
                logger.debug(f"taskkill unavailable: {e}")
            process.kill()
            return
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass


def _partial(captured: Union[bytes, str, None]) -> str:
    if captured is None:
        return ""
    if isinstance(captured, bytes):
        return captured.decode("utf-8", errors="replace")
    return captured
