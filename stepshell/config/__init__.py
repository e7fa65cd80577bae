"""Configuration management for stepshell."""

from .manager import ConfigError, ConfigManager, create_config_manager
from .templates import CONFIG_TEMPLATE, SYSTEM_PROMPT_TEMPLATE

__all__ = [
    "ConfigError",
    "ConfigManager",
    "create_config_manager",
    "CONFIG_TEMPLATE",
    "SYSTEM_PROMPT_TEMPLATE",
]
