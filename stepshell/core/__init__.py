"""Core application logic for stepshell."""

from .agent import AgentLoop, ConversationHistory, LoopState, RunOutcome, RunStatus
from .application import StepShell, create_application
from .tools import Tool, ToolRegistry, create_tool_registry, get_weather_info

__all__ = [
    "AgentLoop",
    "ConversationHistory",
    "LoopState",
    "RunOutcome",
    "RunStatus",
    "StepShell",
    "create_application",
    "Tool",
    "ToolRegistry",
    "create_tool_registry",
    "get_weather_info",
]
