"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dtool.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_FORMAT,
    ENV_LOG_LEVEL,
    ENV_NO_COLOR,
    get_config_path,
)
from dtool.config.schema import DToolConfig
from dtool.exceptions import ConfigError, ConfigValidationError
from dtool.output.base import OutputFormat

# Global config instance (singleton)
_config: DToolConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> DToolConfig:
    """Load configuration from a TOML file and the environment.

    Environment overrides are merged into the file's data before
    validation, so a bad ``DTOOL_LOG_LEVEL`` is reported like a bad file.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If the merged values are invalid.
    """
    path = config_path or get_config_path()

    if not path.exists() and create_if_missing:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)

    data: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        return DToolConfig.model_validate(_merge_env(data))
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def _merge_env(data: dict[str, Any]) -> dict[str, Any]:
    output = dict(data.get("output") or {})
    logging_ = dict(data.get("logging") or {})

    if level := os.environ.get(ENV_LOG_LEVEL):
        logging_["level"] = level

    # Unknown formats are ignored so a stale variable can't break every command
    fmt = os.environ.get(ENV_FORMAT, "").lower()
    if fmt in {f.value for f in OutputFormat}:
        output["default_format"] = fmt

    # https://no-color.org: any non-empty value disables color
    if os.environ.get(ENV_NO_COLOR):
        output["color"] = False

    return {**data, "output": output, "logging": logging_}


def get_config() -> DToolConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
