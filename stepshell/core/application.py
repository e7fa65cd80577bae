"""Main application class for stepshell."""

import signal
import sys
from typing import Optional
from pathlib import Path

from ..commands import create_command_executor, create_run_context, create_safety_checker
from ..config.manager import create_config_manager
from ..llm import LLMClient, create_payload_builder
from ..utils.logging import logger
from .agent import AgentLoop, RunOutcome
from .tools import create_tool_registry


class StepShell:
    """Main application class for stepshell."""

    def __init__(self, config_dir: Optional[str] = None, debug: bool = False,
                 max_steps: Optional[int] = None, llm_client: Optional[LLMClient] = None,
                 check_credentials: bool = True):
        """Initialize the stepshell application.

        Args:
            config_dir: Custom configuration directory path
            debug: Enable debug logging
            max_steps: Override the configured step cap
            llm_client: Preconfigured backend client (built from config if None)
            check_credentials: Build the backend client, failing on missing credentials.
                Disabled for read-only uses such as the configuration summary.

        Raises:
            ConfigError: configuration is invalid or credentials are missing
        """
        logger.set_debug(debug)

        config_path = Path(config_dir) if config_dir else None
        self.config_manager = create_config_manager(config_path)
        self.config = self.config_manager.config

        # Update debug setting from config if not explicitly set
        if not debug and self.config.get("enable_debug", False):
            logger.set_debug(True)

        if max_steps is not None:
            self.config["max_steps"] = max_steps

        self.payload_builder = create_payload_builder(self.config)
        if llm_client is None and check_credentials:
            self.config_manager.require_credentials()
            llm_client = LLMClient(self.config, self.payload_builder)
        self.llm_client = llm_client

        self.command_executor = create_command_executor(
            self.config["command_timeout"],
            create_safety_checker(self.config_manager.get_blacklisted_commands()),
        )
        self.tools = create_tool_registry(self.command_executor)

        self._setup_signal_handlers()

        logger.debug("Application initialization complete")

    def run_single_task(self, query: str) -> RunOutcome:
        """Run one query to completion or abort.

        Args:
            query: User request

        Returns:
            Outcome of the run
        """
        if self.llm_client is None:
            self.config_manager.require_credentials()
            self.llm_client = LLMClient(self.config, self.payload_builder)

        context = create_run_context()
        loop = AgentLoop(
            self.llm_client,
            self.tools,
            self.payload_builder.build_system_prompt(self.tools.descriptions(), context.cwd),
            max_steps=self.config["max_steps"],
        )
        outcome = loop.run(query, context)
        logger.system("Process completed.")
        return outcome

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(sig, frame):
            logger.system(f"Received signal {sig}, shutting down gracefully...")
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def get_config_summary(self) -> dict:
        """Get a summary of the current configuration.

        Returns:
            Dictionary with configuration summary
        """
        return {
            "base_url": self.config.get("base_url"),
            "model": self.config.get("model"),
            "api_key": "set" if self.config.get("api_key") else "missing",
            "max_steps": self.config.get("max_steps"),
            "command_timeout": self.config.get("command_timeout"),
            "enable_debug": self.config.get("enable_debug", False),
            "blacklisted_commands_count": len(self.config_manager.get_blacklisted_commands()),
            "tools": ", ".join(self.tools),
        }

    def print_config_summary(self) -> None:
        """Print a summary of the current configuration."""
        logger.system("Configuration Summary:")
        for key, value in self.get_config_summary().items():
            logger.system(f"  {key}: {value}")


def create_application(config_dir: Optional[str] = None, debug: bool = False,
                       max_steps: Optional[int] = None, check_credentials: bool = True) -> StepShell:
    """Create and initialize a StepShell application instance.

    Args:
        config_dir: Custom configuration directory path
        debug: Enable debug logging
        max_steps: Override the configured step cap
        check_credentials: Fail now when backend credentials are missing

    Returns:
        Initialized StepShell instance
    """
    return StepShell(config_dir, debug, max_steps, check_credentials=check_credentials)
