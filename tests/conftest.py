import pytest

from stepshell.constants import (
    ENV_API_KEY, ENV_BASE_URL, ENV_MODEL, ENV_MAX_STEPS, ENV_COMMAND_TIMEOUT, LEGACY_ENV_API_KEY
)

STEPSHELL_ENV_VARS = (
    ENV_API_KEY, ENV_BASE_URL, ENV_MODEL, ENV_MAX_STEPS, ENV_COMMAND_TIMEOUT, LEGACY_ENV_API_KEY
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so monkeypatch removes values a .env file loads during the test
    for name in STEPSHELL_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class ScriptedClient:
    """Backend double returning canned replies in order."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def send_request(self, messages):
        self.calls.append(messages)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def scripted_client():
    return ScriptedClient
