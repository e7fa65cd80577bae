"""Tools the model can invoke through action steps."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Optional

from ..commands import CommandExecutor, RunContext

ToolHandler = Callable[[str, RunContext], str]


@dataclass(frozen=True)
class Tool:
    """A named capability: takes the action input and the run context, returns text.

    Handlers signal failure by raising ``CommandError``.
    """
    name: str
    description: str
    handler: ToolHandler


class ToolRegistry:
    """Fixed set of tools, validated once and read-only afterwards."""

    def __init__(self, tools: Iterable[Tool]):
        registered: Dict[str, Tool] = {}
        for tool in tools:
            if not tool.name:
                raise ValueError("Tool name must not be empty")
            if tool.name in registered:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            if not callable(tool.handler):
                raise TypeError(f"Tool handler for '{tool.name}' is not callable")
            registered[tool.name] = tool
        self._tools = MappingProxyType(registered)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def invoke(self, name: str, tool_input: str, context: RunContext) -> str:
        """Call a registered tool. Raises ``KeyError`` for unknown names."""
        return self._tools[name].handler(tool_input, context)

    def descriptions(self) -> Dict[str, str]:
        return {name: tool.description for name, tool in self._tools.items()}


def get_weather_info(city_name: str, context: Optional[RunContext] = None) -> str:
    """Stub weather lookup."""
    return f"{city_name} has 25°C with partly cloudy skies"


def create_tool_registry(executor: CommandExecutor) -> ToolRegistry:
    """Create the registry exposing command execution and the weather stub."""
    return ToolRegistry([
        Tool(
            name="getWeatherInfo",
            description="getWeatherInfo(city: string): Returns weather information for a city",
            handler=get_weather_info,
        ),
        Tool(
            name="executeCommand",
            description="executeCommand(command: string): Executes cross-platform commands",
            handler=executor.execute,
        ),
    ])
