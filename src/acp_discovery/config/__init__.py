"""Configuration management."""

from acp_discovery.config.manager import ConfigManager, ConfigurationError

__all__ = ["ConfigManager", "ConfigurationError"]
