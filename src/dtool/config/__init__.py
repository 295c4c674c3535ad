"""Configuration management."""

from dtool.config.loader import get_config, load_config, reset_config
from dtool.config.schema import DToolConfig

__all__ = ["DToolConfig", "get_config", "load_config", "reset_config"]
