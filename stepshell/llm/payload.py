"""Chat-completion request preparation for stepshell."""

from pathlib import Path
from typing import Dict, Any, List, Optional

from ..config.templates import SYSTEM_PROMPT_TEMPLATE
from ..constants import (
    DEFAULT_MODEL, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
)
from ..utils.helpers import get_current_context

Message = Dict[str, str]


class PayloadBuilder:
    """Builds the system prompt and the request arguments for each model turn."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize payload builder.

        Args:
            config: Application configuration
        """
        self.config = config

    def build_system_prompt(self, tool_descriptions: Dict[str, str],
                            cwd: Optional[Path] = None) -> str:
        """Render the protocol instructions for the run.

        A ``system_prompt`` set in the configuration is used verbatim.
        """
        custom_prompt = self.config.get("system_prompt")
        if custom_prompt:
            return custom_prompt

        tools = "\n".join(f"- {name}: {description}" for name, description in tool_descriptions.items())
        return SYSTEM_PROMPT_TEMPLATE.format(tool_descriptions=tools, **get_current_context(cwd))

    def prepare_request(self, messages: List[Message]) -> Dict[str, Any]:
        """Prepare keyword arguments for one chat-completion call.

        Args:
            messages: Full conversation history, system instruction first

        Returns:
            Request arguments forcing a JSON object reply
        """
        return {
            "model": self.config.get("model", DEFAULT_MODEL),
            "max_tokens": self.config.get("max_tokens", DEFAULT_MAX_TOKENS),
            "temperature": self.config.get("temperature", DEFAULT_TEMPERATURE),
            "top_p": self.config.get("top_p", DEFAULT_TOP_P),
            "response_format": {"type": "json_object"},
            "messages": [dict(message) for message in messages],
        }


def create_payload_builder(config: Dict[str, Any]) -> PayloadBuilder:
    """Create a configured payload builder instance."""
    return PayloadBuilder(config)
