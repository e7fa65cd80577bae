"""
stepshell - LLM agent loop with a think/action/observe/output protocol.

The model works one JSON step at a time; action steps run commands on the
local machine through an engine that handles common filesystem intents
in-process and passes everything else to the platform shell.
"""

__version__ = "1.0.0"
__author__ = "stepshell Team"

# Main API imports
from .core.application import StepShell, create_application
from .core.agent import AgentLoop, RunOutcome, RunStatus
from .commands.executor import CommandExecutor, create_command_executor
from .config.manager import ConfigError, ConfigManager, create_config_manager

__all__ = [
    "StepShell",
    "create_application",
    "AgentLoop",
    "RunOutcome",
    "RunStatus",
    "CommandExecutor",
    "create_command_executor",
    "ConfigError",
    "ConfigManager",
    "create_config_manager",
    "__version__",
]
