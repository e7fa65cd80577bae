"""LLM integration for stepshell."""

from .client import LLMClient, create_llm_client
from .errors import BackendError, ProtocolViolation
from .payload import PayloadBuilder, create_payload_builder
from .parsers import (
    ActionStep,
    ObserveStep,
    OutputStep,
    Step,
    ThinkStep,
    format_observation,
    parse_step,
)

__all__ = [
    "LLMClient",
    "create_llm_client",
    "BackendError",
    "ProtocolViolation",
    "PayloadBuilder",
    "create_payload_builder",
    "ActionStep",
    "ObserveStep",
    "OutputStep",
    "Step",
    "ThinkStep",
    "format_observation",
    "parse_step",
]
