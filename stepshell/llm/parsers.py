"""Parsing of model replies into protocol steps."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from .errors import ProtocolViolation


@dataclass(frozen=True)
class ThinkStep:
    content: str


@dataclass(frozen=True)
class ActionStep:
    tool: str
    input: str


@dataclass(frozen=True)
class ObserveStep:
    content: str


@dataclass(frozen=True)
class OutputStep:
    content: str


Step = Union[ThinkStep, ActionStep, ObserveStep, OutputStep]


def _require_string(data: Dict[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ProtocolViolation(f"'{kind}' step requires a string '{key}' field")
    return value


def parse_step(raw: str) -> Step:
    """Parse one model reply into a step.

    Args:
        raw: Reply content, expected to be a single JSON object

    Returns:
        The matching step variant

    Raises:
        ProtocolViolation: if the reply is not JSON, not an object, names an
            unknown step kind or lacks the fields of its kind
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ProtocolViolation(f"JSON Parse Error: {e}", raw) from e

    if not isinstance(data, dict):
        raise ProtocolViolation("Step must be a JSON object", raw)

    kind = data.get("step")
    try:
        if kind == "think":
            return ThinkStep(_require_string(data, "content", kind))
        if kind == "action":
            return ActionStep(_require_string(data, "tool", kind), _require_string(data, "input", kind))
        if kind == "observe":
            return ObserveStep(_require_string(data, "content", kind))
        if kind == "output":
            return OutputStep(_require_string(data, "content", kind))
    except ProtocolViolation as e:
        raise ProtocolViolation(str(e), raw) from None
    raise ProtocolViolation(f"Unknown step: {kind}", raw)


def format_observation(content: str) -> str:
    """Serialize a tool result as an observe step for the conversation history."""
    return json.dumps({"step": "observe", "content": content})
