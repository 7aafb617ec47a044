"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration for pagekit with environment variable override.

Features:
    - Single YAML file (config/config.yaml by default)
    - Environment variable override (BROWSER_HEADLESS overrides browser.headless)
    - Dot notation path access with defaults
    - Type conversion of environment values to the type of the default

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Built-in values used when neither the YAML file nor the environment has a key
DEFAULTS: Dict[str, Any] = {
    "browser": {
        "type": "chromium",
        "headless": True,
    },
    "app": {
        "base_url": "",
    },
    "timeouts": {
        "element": 5,
        "poll_interval": 0.1,
        "page_load": 30000,
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (TIMEOUTS_ELEMENT)
        2. YAML configuration file
        3. Built-in DEFAULTS
        4. Default passed to get()

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("timeouts.element", 5)
        5
        >>> config.get("browser.type")
        'chromium'
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """One loader per process; later constructions return the same object."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.debug(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    @staticmethod
    def _lookup(data: Dict[str, Any], key: str) -> Any:
        value: Any = data
        for part in key.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
            if value is None:
                return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "timeouts.element")
            default: Default value if key not found anywhere

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            reference = default
            if reference is None:
                reference = self._lookup(DEFAULTS, key)
            return self._convert_type(env_value, reference)

        value = self._lookup(self._config, key)
        if value is None:
            value = self._lookup(DEFAULTS, key)
        return default if value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section merged over the built-in defaults.

        Args:
            section: Section name (e.g., "browser", "timeouts")
        """
        merged = dict(DEFAULTS.get(section, {}))
        merged.update(self._config.get(section, {}) or {})
        return merged

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the process instance so the next construction reloads."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULTS",
]
