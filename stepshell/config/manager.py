"""Configuration manager for stepshell."""

from typing import Dict, Any, List, Optional
from pathlib import Path
import os

import yaml
from dotenv import load_dotenv

from ..constants import (
    CONFIG_DIR, ENV_API_KEY, ENV_BASE_URL, ENV_MODEL, ENV_MAX_STEPS,
    ENV_COMMAND_TIMEOUT, LEGACY_ENV_API_KEY, DEFAULT_BASE_URL, DEFAULT_MODEL,
    DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P, DEFAULT_MAX_STEPS,
    DEFAULT_COMMAND_TIMEOUT, DEFAULT_ENABLE_DEBUG
)
from ..utils.logging import logger
from ..utils.helpers import safe_file_write
from .templates import CONFIG_TEMPLATE


class ConfigError(Exception):
    """Configuration is missing or invalid."""


DEFAULTS: Dict[str, Any] = {
    "api_key": None,
    "base_url": DEFAULT_BASE_URL,
    "model": DEFAULT_MODEL,
    "max_tokens": DEFAULT_MAX_TOKENS,
    "temperature": DEFAULT_TEMPERATURE,
    "top_p": DEFAULT_TOP_P,
    "max_steps": DEFAULT_MAX_STEPS,
    "command_timeout": DEFAULT_COMMAND_TIMEOUT,
    "enable_debug": DEFAULT_ENABLE_DEBUG,
    "blacklisted_commands": [],
    "system_prompt": None,
}


class ConfigManager:
    """Manages configuration loading and validation for stepshell.

    Values are layered: built-in defaults, then ``config.yaml``, then the
    environment (after ``.env`` has been loaded).
    """

    def __init__(self, config_dir: Optional[Path] = None, env_file: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory path
            env_file: Explicit .env file (defaults to searching from the cwd)
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.yaml"
        self.env_file = env_file

        self._config: Optional[Dict[str, Any]] = None

    def initialize(self) -> None:
        """Load .env, the YAML file and environment overrides, then validate."""
        if self.env_file is not None:
            load_dotenv(self.env_file)
        else:
            load_dotenv()

        config_data = dict(DEFAULTS)
        config_data.update(self._load_file())
        config_data.update(self._load_env())
        self._config = self._validate(config_data)
        logger.debug(f"Configuration loaded (file: {self.config_file})")

    def write_template(self) -> bool:
        """Write the commented config template if no config file exists yet."""
        if self.config_file.exists():
            logger.warning(f"Configuration file already exists: {self.config_file}")
            return False
        return safe_file_write(self.config_file, CONFIG_TEMPLATE, "config template")

    def _load_file(self) -> Dict[str, Any]:
        """Load the YAML configuration file, if present."""
        if not self.config_file.exists():
            logger.debug(f"No configuration file at {self.config_file}, using defaults")
            return {}

        try:
            with open(self.config_file, 'r', encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read {self.config_file}: {e}") from e

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"{self.config_file} is not a valid YAML dictionary.")

        unknown = sorted(set(config_data) - set(DEFAULTS))
        if unknown:
            logger.warning(f"Ignoring unknown keys in {self.config_file}: {', '.join(unknown)}")
        return {key: value for key, value in config_data.items() if key in DEFAULTS}

    def _load_env(self) -> Dict[str, Any]:
        """Collect overrides from environment variables."""
        overrides: Dict[str, Any] = {}
        api_key = os.getenv(ENV_API_KEY) or os.getenv(LEGACY_ENV_API_KEY)
        if api_key:
            overrides["api_key"] = api_key
        if os.getenv(ENV_BASE_URL):
            overrides["base_url"] = os.getenv(ENV_BASE_URL)
        if os.getenv(ENV_MODEL):
            overrides["model"] = os.getenv(ENV_MODEL)
        for key, env_name in (("max_steps", ENV_MAX_STEPS), ("command_timeout", ENV_COMMAND_TIMEOUT)):
            value = os.getenv(env_name)
            if value is None:
                continue
            try:
                overrides[key] = int(value.strip())
            except ValueError as e:
                raise ConfigError(f"{env_name} must be an integer, got '{value}'.") from e
        return overrides

    def _validate(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        for key in ("max_steps", "max_tokens", "command_timeout"):
            value = config_data[key]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{key} ('{value}') must be a positive integer.")

        for key in ("temperature", "top_p"):
            value = config_data[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{key} ('{value}') must be a number.")
            config_data[key] = float(value)

        if not isinstance(config_data["enable_debug"], bool):
            logger.warning("enable_debug must be true/false. Defaulting to false.")
            config_data["enable_debug"] = DEFAULT_ENABLE_DEBUG

        blacklisted = config_data["blacklisted_commands"] or []
        if isinstance(blacklisted, dict):
            blacklisted = list(blacklisted)
        if not isinstance(blacklisted, list):
            raise ConfigError("blacklisted_commands must be a list of command names.")
        config_data["blacklisted_commands"] = [str(cmd) for cmd in blacklisted]

        for key in ("model", "base_url"):
            if not isinstance(config_data[key], str) or not config_data[key].strip():
                raise ConfigError(f"{key} must be a non-empty string.")

        if config_data["system_prompt"] is not None and not isinstance(config_data["system_prompt"], str):
            raise ConfigError("system_prompt must be a string.")

        return config_data

    def require_credentials(self) -> None:
        """Fail fast when the backend credential/endpoint pair is incomplete."""
        if not self.get("api_key"):
            raise ConfigError(
                f"No API key configured. Set {ENV_API_KEY} in the environment or a .env file."
            )
        if not self.get("base_url"):
            raise ConfigError(
                f"No base URL configured. Set {ENV_BASE_URL} or base_url in {self.config_file}."
            )

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.get(key, default)

    def get_blacklisted_commands(self) -> List[str]:
        """Get the blacklisted command names."""
        return list(self.get("blacklisted_commands", []))


def create_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Create and initialize a configuration manager.

    Args:
        config_dir: Custom configuration directory path

    Returns:
        Initialized ConfigManager instance
    """
    manager = ConfigManager(config_dir)
    manager.initialize()
    return manager
