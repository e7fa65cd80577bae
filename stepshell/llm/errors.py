"""Failures that end an agent run."""


class ProtocolViolation(Exception):
    """The model reply is not a valid step of the think/action/observe/output protocol."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class BackendError(Exception):
    """The model backend call itself failed."""
