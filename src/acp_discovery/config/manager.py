"""Configuration file management."""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from acp_discovery.detection.options import DEFAULT_DETECT_TIMEOUT, DetectOptions
from acp_discovery.install.progress import DEFAULT_INSTALL_TIMEOUT, InstallOptions

logger = logging.getLogger(__name__)

# Configuration schema version
CONFIG_VERSION = "1.0.0"

DEFAULT_CONFIG_PATH = Path(".acp-discovery/config.json")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration schema
DEFAULT_CONFIG = {
    "version": CONFIG_VERSION,
    "detection": {
        "timeout": DEFAULT_DETECT_TIMEOUT,
        "skip_version": False,
        "use_fallback_paths": True,
    },
    "install": {
        "timeout": DEFAULT_INSTALL_TIMEOUT,
    },
    "logging": {
        "level": "WARNING",
    },
}


class ConfigurationError(Exception):
    """Configuration related errors."""

    pass


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and value > 0


class ConfigManager:
    """Manages acp-discovery configuration."""

    def __init__(self, config_path: Path | None = None):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file. Defaults to .acp-discovery/config.json
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """Load configuration from file.

        Returns:
            Configuration dictionary

        Raises:
            ConfigurationError: If config file is invalid
        """
        if not self.config_path.exists():
            logger.debug(f"Config file {self.config_path} not found, using defaults")
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            return self._config

        try:
            with open(self.config_path) as f:
                self._config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        self._validate_config()
        self._merge_with_defaults()

        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

    def save(self, config: dict[str, Any] | None = None) -> None:
        """Save configuration to file.

        Args:
            config: Configuration to save. If None, saves current config.

        Raises:
            ConfigurationError: If save fails
        """
        if config is not None:
            self._config = config
            self._validate_config()

        if not self._config:
            self._config = copy.deepcopy(DEFAULT_CONFIG)

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, "w") as f:
                json.dump(self._config, f, indent=2)
            logger.debug(f"Saved configuration to {self.config_path}")
        except OSError as e:
            raise ConfigurationError(f"Failed to save config: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g. "detection.timeout")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._config:
            self.load()

        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value and re-validate.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        if not self._config:
            self.load()

        keys = key.split(".")
        target = self._config
        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]

        previous = copy.deepcopy(self._config)
        target[keys[-1]] = value
        try:
            self._validate_config()
        except ConfigurationError:
            self._config = previous
            raise

    def detect_options(self) -> DetectOptions:
        """Build probe options from the detection section."""
        return DetectOptions(
            timeout=float(self.get("detection.timeout", DEFAULT_DETECT_TIMEOUT)),
            skip_version=bool(self.get("detection.skip_version", False)),
            use_fallback_paths=bool(self.get("detection.use_fallback_paths", True)),
        )

    def install_options(self) -> InstallOptions:
        """Build installer options from the install section."""
        return InstallOptions(timeout=float(self.get("install.timeout", DEFAULT_INSTALL_TIMEOUT)))

    def _validate_config(self) -> None:
        """Validate configuration structure.

        Raises:
            ConfigurationError: If config is invalid
        """
        if not isinstance(self._config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        if "version" in self._config and not isinstance(self._config["version"], str):
            raise ConfigurationError("Configuration version must be a string")

        for section in ("detection", "install", "logging"):
            if section in self._config and not isinstance(self._config[section], dict):
                raise ConfigurationError(f"'{section}' settings must be a dictionary")

        detection = self._config.get("detection", {})
        if "timeout" in detection and not _is_positive_number(detection["timeout"]):
            raise ConfigurationError("detection.timeout must be a positive number")
        for flag in ("skip_version", "use_fallback_paths"):
            if flag in detection and not isinstance(detection[flag], bool):
                raise ConfigurationError(f"detection.{flag} must be true or false")

        install = self._config.get("install", {})
        if "timeout" in install and not _is_positive_number(install["timeout"]):
            raise ConfigurationError("install.timeout must be a positive number")

        logging_section = self._config.get("logging", {})
        if "level" in logging_section and logging_section["level"] not in LOG_LEVELS:
            raise ConfigurationError(f"logging.level must be one of: {', '.join(LOG_LEVELS)}")

    def _merge_with_defaults(self) -> None:
        """Merge loaded config with defaults for missing fields."""

        def deep_merge(default: dict, config: dict) -> dict:
            """Recursively merge config with defaults."""
            result = copy.deepcopy(default)
            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        self._config = deep_merge(DEFAULT_CONFIG, self._config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")
