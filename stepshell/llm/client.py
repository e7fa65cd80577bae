"""LLM client for chat-completion calls in stepshell."""

from typing import Dict, Any, List, Optional

import openai

from ..utils.logging import logger
from .errors import BackendError
from .payload import Message, PayloadBuilder, create_payload_builder


class LLMClient:
    """Requests one protocol step at a time from an OpenAI-compatible backend."""

    def __init__(self, config: Dict[str, Any], payload_builder: Optional[PayloadBuilder] = None,
                 client: Optional[Any] = None):
        """Initialize LLM client.

        Args:
            config: Application configuration (needs api_key and base_url)
            payload_builder: Request builder (defaults to one built from config)
            client: Preconfigured SDK client, mainly for tests
        """
        self.config = config
        self.model = config.get("model")
        self.payload_builder = payload_builder or create_payload_builder(config)
        self.client = client or openai.OpenAI(
            api_key=config.get("api_key"),
            base_url=config.get("base_url"),
        )

    def send_request(self, messages: List[Message]) -> str:
        """Send the conversation and return the assistant reply content.

        Raises:
            BackendError: the call failed or returned no content
        """
        request = self.payload_builder.prepare_request(messages)
        logger.debug(f"Requesting step from {self.model} ({len(messages)} messages)")

        try:
            response = self.client.chat.completions.create(**request)
        except openai.OpenAIError as e:
            raise BackendError(f"API Error: {e}") from e

        if not response.choices:
            raise BackendError("API Error: response contained no choices")
        content = response.choices[0].message.content
        if content is None:
            raise BackendError("API Error: response message has no content")

        logger.debug(f"Raw response: {content}")
        return content


def create_llm_client(config: Dict[str, Any]) -> LLMClient:
    """Create a configured LLM client instance."""
    return LLMClient(config)
