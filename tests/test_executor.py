import os
import shutil
import sys
import time

import pytest

from stepshell.commands import (
    CommandBlocked, CommandError, CommandExecutor, CommandSafetyChecker, DirectoryNotFound, FilesystemError,
    RunContext, SubprocessFailure, SubprocessTimeout, UnsupportedPlatformOperation
)

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses POSIX shell syntax")


@pytest.fixture
def context(tmp_path):
    return RunContext(tmp_path)


@pytest.fixture
def executor():
    return CommandExecutor(default_timeout=5)


def test_create_file_builds_missing_parents(executor, context, tmp_path) -> None:
    result = executor.execute('createFile "a/b/c.txt" "hello\\nworld"', context)

    assert result == "File created successfully: a/b/c.txt"
    assert (tmp_path / "a" / "b" / "c.txt").read_bytes() == b"hello\nworld"


def test_create_file_overwrites_existing(executor, context, tmp_path) -> None:
    (tmp_path / "note.txt").write_text("old")

    executor.execute('echo "new" > note.txt', context)

    assert (tmp_path / "note.txt").read_text() == "new"


def test_create_file_under_a_file_fails(executor, context, tmp_path) -> None:
    (tmp_path / "blocker").write_text("x")

    with pytest.raises(FilesystemError, match="Failed to create file"):
        executor.execute('createFile "blocker/inner.txt" "x"', context)


def test_mkdir_twice_reports_existing(executor, context, tmp_path) -> None:
    assert executor.execute('mkdir "proj"', context) == "Directory created: proj"
    assert executor.execute('mkdir "proj"', context) == "Directory already exists: proj"
    assert (tmp_path / "proj").is_dir()


def test_mkdir_over_existing_file_fails(executor, context, tmp_path) -> None:
    (tmp_path / "taken").write_text("x")

    with pytest.raises(FilesystemError, match="Failed to create directory"):
        executor.execute("mkdir taken", context)


def test_list_returns_sorted_entries(executor, context, tmp_path) -> None:
    (tmp_path / "b.txt").write_text("")
    (tmp_path / "a").mkdir()

    assert executor.execute("ls", context) == "a\nb.txt"


def test_list_empty_directory(executor, context) -> None:
    assert executor.execute("dir", context) == ""


def test_pwd_reports_run_directory(executor, context, tmp_path) -> None:
    assert executor.execute("pwd", context) == str(tmp_path.resolve())


def test_cd_moves_only_the_run_context(executor, context, tmp_path) -> None:
    (tmp_path / "src").mkdir()
    process_cwd = os.getcwd()

    result = executor.execute('cd "src"', context)

    assert result == f"Changed directory to: {(tmp_path / 'src').resolve()}"
    assert context.cwd == (tmp_path / "src").resolve()
    assert os.getcwd() == process_cwd

    executor.execute('createFile "inside.txt" "x"', context)
    assert (tmp_path / "src" / "inside.txt").exists()


def test_cd_missing_directory_leaves_cwd(executor, context, tmp_path) -> None:
    with pytest.raises(DirectoryNotFound, match="Directory not found: nonexistent"):
        executor.execute('cd "nonexistent"', context)

    assert context.cwd == tmp_path.resolve()


def test_cd_into_file_fails(executor, context, tmp_path) -> None:
    (tmp_path / "file.txt").write_text("")

    with pytest.raises(FilesystemError, match="not a directory"):
        executor.execute("cd file.txt", context)
    assert context.cwd == tmp_path.resolve()


def test_cd_parent(executor, tmp_path) -> None:
    (tmp_path / "child").mkdir()
    context = RunContext(tmp_path / "child")

    executor.execute("cd ..", context)

    assert context.cwd == tmp_path.resolve()


@posix_only
def test_raw_shell_success_returns_both_streams(executor, context) -> None:
    result = executor.execute("printf 'hi\\n'; printf 'oops\\n' 1>&2", context)

    assert result == "stdout: hi\n\nstderr: oops\n"


@posix_only
def test_raw_shell_runs_in_run_directory(executor, context, tmp_path) -> None:
    result = executor.execute("pwd -P", context)

    assert str(tmp_path.resolve()) in result


@posix_only
def test_raw_shell_nonzero_exit(executor, context) -> None:
    with pytest.raises(SubprocessFailure) as excinfo:
        executor.execute("printf broken 1>&2; exit 3", context)

    assert excinfo.value.exit_code == 3
    assert str(excinfo.value).startswith("Command failed with code 3:")
    assert "broken" in excinfo.value.stderr


@posix_only
def test_raw_shell_timeout_kills_command(context) -> None:
    executor = CommandExecutor(default_timeout=0.5)
    started = time.monotonic()

    with pytest.raises(SubprocessTimeout, match="timed out after 0.5 seconds"):
        executor.execute("sleep 5", context)

    assert time.monotonic() - started < 4


def test_windows_rejects_shell_metacharacters(context) -> None:
    executor = CommandExecutor(safety_checker=CommandSafetyChecker(windows=True))

    with pytest.raises(UnsupportedPlatformOperation, match="Complex shell operations"):
        executor.execute("type a.txt | findstr x", context)


def test_windows_still_handles_recognized_intents(context, tmp_path) -> None:
    executor = CommandExecutor(safety_checker=CommandSafetyChecker(windows=True))

    executor.execute('echo "hi" > out.txt', context)

    assert (tmp_path / "out.txt").read_text() == "hi"


def test_blacklisted_command_is_blocked(context) -> None:
    executor = CommandExecutor(safety_checker=CommandSafetyChecker(["rm"], windows=False))

    with pytest.raises(CommandBlocked, match="'rm' is blacklisted"):
        executor.execute("sudo rm -rf build", context)


def test_safety_checker_allows_other_commands() -> None:
    checker = CommandSafetyChecker(["rm"], windows=False)

    checker.check("git status | head")


def test_null_byte_in_directory_name(executor, context) -> None:
    with pytest.raises(FilesystemError, match="Failed to create directory"):
        executor.execute('mkdir "a\x00b"', context)


def test_null_byte_in_file_path(executor, context) -> None:
    with pytest.raises(FilesystemError, match="Failed to create file"):
        executor.execute('createFile "x\x00y" "hi"', context)


def test_unencodable_file_content(executor, context) -> None:
    with pytest.raises(FilesystemError, match="Failed to create file"):
        executor.execute('createFile "s.txt" "bad \ud800 char"', context)


def test_null_byte_in_cd_target(executor, context, tmp_path) -> None:
    with pytest.raises(CommandError):
        executor.execute('cd "a\x00b"', context)

    assert context.cwd == tmp_path.resolve()


def test_null_byte_in_shell_command(executor, context) -> None:
    with pytest.raises(SubprocessFailure, match="Failed to execute command"):
        executor.execute("printf 'a\x00b'", context)


@posix_only
@pytest.mark.skipif(shutil.which("setsid") is None, reason="needs setsid")
def test_timeout_does_not_wait_for_escaped_descendants(context) -> None:
    executor = CommandExecutor(default_timeout=1)
    started = time.monotonic()

    with pytest.raises(SubprocessTimeout) as excinfo:
        executor.execute("setsid sleep 8 & echo started", context)

    assert time.monotonic() - started < 6
    assert "started" in excinfo.value.stdout
