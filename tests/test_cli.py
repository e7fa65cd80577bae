import argparse
import json
import signal

import pytest

from stepshell import cli
from stepshell.config.manager import ConfigError
from stepshell.constants import DEFAULT_QUERY
from stepshell.core.agent import RunOutcome, RunStatus
from stepshell.core.application import StepShell


class FakeApp:
    def __init__(self, status=RunStatus.COMPLETED):
        self.status = status
        self.queries = []

    def run_single_task(self, query):
        self.queries.append(query)
        return RunOutcome(self.status, "answer", 1)

    def print_config_summary(self):
        self.queries.append("<summary>")


@pytest.fixture
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(signal, "signal", lambda *args: None)


def test_parser_defaults() -> None:
    args = cli.create_parser().parse_args([])

    assert args.query == []
    assert args.debug is False
    assert args.max_steps is None


def test_parser_rejects_non_positive_max_steps() -> None:
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args(["--max-steps", "0"])


def test_positive_int() -> None:
    assert cli.positive_int("4") == 4
    with pytest.raises(argparse.ArgumentTypeError):
        cli.positive_int("four")


def test_query_words_are_joined(monkeypatch) -> None:
    app = FakeApp()
    monkeypatch.setattr(cli, "create_application", lambda **kwargs: app)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["list", "the", "files"])

    assert excinfo.value.code == 0
    assert app.queries == ["list the files"]


def test_empty_query_uses_demo_query(monkeypatch) -> None:
    app = FakeApp()
    monkeypatch.setattr(cli, "create_application", lambda **kwargs: app)

    with pytest.raises(SystemExit):
        cli.main([])

    assert app.queries == [DEFAULT_QUERY]


def test_aborted_run_exits_nonzero(monkeypatch) -> None:
    monkeypatch.setattr(cli, "create_application", lambda **kwargs: FakeApp(RunStatus.PARSE_ERROR))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["hello"])

    assert excinfo.value.code == 1


def test_options_are_passed_to_application(monkeypatch) -> None:
    received = {}

    def create_application(**kwargs):
        received.update(kwargs)
        return FakeApp()

    monkeypatch.setattr(cli, "create_application", create_application)

    with pytest.raises(SystemExit):
        cli.main(["--debug", "--max-steps", "3", "--config-dir", "/tmp/cfg", "hi"])

    assert received == {"config_dir": "/tmp/cfg", "debug": True, "max_steps": 3, "check_credentials": True}


def test_config_error_exits_nonzero(monkeypatch) -> None:
    def broken(**kwargs):
        raise ConfigError("No API key configured.")

    monkeypatch.setattr(cli, "create_application", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["hello"])

    assert excinfo.value.code == 1


def test_missing_credentials_exit_before_any_request(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config-dir", str(tmp_path), "hello"])

    assert excinfo.value.code == 1


def test_config_summary_does_not_run(monkeypatch) -> None:
    app = FakeApp()
    monkeypatch.setattr(cli, "create_application", lambda **kwargs: app)

    cli.main(["--config-summary"])

    assert app.queries == ["<summary>"]


def test_init_config_writes_template(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--init-config", "--config-dir", str(tmp_path)])

    assert excinfo.value.code == 0
    assert (tmp_path / "config.yaml").exists()

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--init-config", "--config-dir", str(tmp_path)])

    assert excinfo.value.code == 1


def test_application_runs_in_process_cwd(tmp_path, monkeypatch, scripted_client, no_signal_handlers) -> None:
    monkeypatch.chdir(tmp_path)
    client = scripted_client([
        json.dumps({"step": "action", "tool": "executeCommand", "input": 'mkdir "TODO App"'}),
        json.dumps({"step": "action", "tool": "executeCommand",
                    "input": 'createFile "TODO App/index.html" "<h1>ToDo</h1>"'}),
        json.dumps({"step": "output", "content": "Created the app"}),
    ])

    app = StepShell(config_dir=str(tmp_path / "cfg"), llm_client=client)
    outcome = app.run_single_task("build it")

    assert outcome.success
    assert (tmp_path / "TODO App" / "index.html").read_text() == "<h1>ToDo</h1>"
    assert client.calls[0][0]["role"] == "system"
    assert str(tmp_path.resolve()) in client.calls[0][0]["content"]


def test_application_max_steps_override(tmp_path, scripted_client, no_signal_handlers) -> None:
    client = scripted_client([json.dumps({"step": "think", "content": "hmm"})] * 3)

    app = StepShell(config_dir=str(tmp_path), max_steps=2, llm_client=client)
    outcome = app.run_single_task("loop")

    assert outcome.status == RunStatus.MAX_STEPS
    assert len(client.calls) == 2


def test_application_summary_hides_key(tmp_path, monkeypatch, scripted_client, no_signal_handlers) -> None:
    monkeypatch.setenv("STEPSHELL_API_KEY", "secret")

    summary = StepShell(config_dir=str(tmp_path), llm_client=scripted_client([])).get_config_summary()

    assert summary["api_key"] == "set"
    assert summary["tools"] == "getWeatherInfo, executeCommand"


def test_config_summary_works_without_credentials(tmp_path, no_signal_handlers, capsys) -> None:
    cli.main(["--config-summary", "--config-dir", str(tmp_path)])

    assert "api_key: missing" in capsys.readouterr().out


def test_application_without_credential_check(tmp_path, no_signal_handlers) -> None:
    app = StepShell(config_dir=str(tmp_path), check_credentials=False)

    assert app.llm_client is None
    assert app.get_config_summary()["api_key"] == "missing"
    with pytest.raises(ConfigError, match="STEPSHELL_API_KEY"):
        app.run_single_task("hello")
