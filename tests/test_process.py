import subprocess

import pytest

from stepshell.commands.errors import SubprocessFailure
from stepshell.commands.process import ManagedProcess, ProcessResult, shell_argv


def test_shell_argv_windows() -> None:
    assert shell_argv("dir", windows=True) == ["cmd.exe", "/c", "dir"]


def test_shell_argv_posix_passes_command_as_one_argument() -> None:
    argv = shell_argv("echo a && echo b", windows=False)

    assert argv[1:] == ["-c", "echo a && echo b"]
    assert argv[0].endswith(("bash", "sh"))


def test_process_result_output_format() -> None:
    assert ProcessResult(0, "out", "err").output == "stdout: out\nstderr: err"


def test_spawn_failure_is_reported(monkeypatch, tmp_path) -> None:
    def refuse(*args, **kwargs):
        raise FileNotFoundError("no shell here")

    monkeypatch.setattr(subprocess, "Popen", refuse)

    with pytest.raises(SubprocessFailure, match="Failed to execute command: no shell here"):
        ManagedProcess("echo hi", cwd=tmp_path, timeout=1).run()


def test_spawn_rejects_null_byte(tmp_path) -> None:
    with pytest.raises(SubprocessFailure, match="Failed to execute command"):
        ManagedProcess("echo a\x00b", cwd=tmp_path, timeout=1).run()
