import io

from stepshell.utils.logging import Logger


def make_logger(debug=False):
    out, err = io.StringIO(), io.StringIO()
    return Logger(debug, out=out, err=err), out, err


def test_errors_and_warnings_go_to_stderr() -> None:
    log, out, err = make_logger()

    log.error("boom")
    log.warning("careful")
    log.system("hello")

    assert "[Error]: " in err.getvalue() and "boom" in err.getvalue()
    assert "careful" in err.getvalue()
    assert "hello" in out.getvalue()
    assert "boom" not in out.getvalue()


def test_debug_is_dropped_unless_enabled() -> None:
    log, out, _ = make_logger()

    log.debug("hidden")
    log.set_debug(True)
    log.debug("shown")

    assert "hidden" not in out.getvalue()
    assert "shown" in out.getvalue()


def test_step_kinds_get_their_own_level() -> None:
    log, out, _ = make_logger()

    log.step("think", "planning")

    assert "[Think]: " in out.getvalue()


def test_multiline_messages_are_indented() -> None:
    log, out, _ = make_logger()

    log.system("first\nsecond")

    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert "first" in lines[0]
    assert "second" in lines[1]
    assert lines[1].startswith(" ")


def test_unencodable_characters_are_replaced() -> None:
    log, out, _ = make_logger()

    log.command("bad \ud800 char")

    assert "bad ? char" in out.getvalue()
