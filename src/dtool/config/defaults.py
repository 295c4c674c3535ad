"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

PROG_NAME: Final[str] = "dtool"

CONFIG_FILE_NAME: Final[str] = "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "DTOOL_CONFIG"
ENV_LOG_LEVEL: Final[str] = "DTOOL_LOG_LEVEL"
ENV_FORMAT: Final[str] = "DTOOL_FORMAT"
ENV_NO_COLOR: Final[str] = "NO_COLOR"
ENV_XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# dtool configuration

[output]
default_format = "plain"  # plain, json or rich
color = true

[logging]
level = "WARNING"
json_format = false
# file = "/tmp/dtool.log"
"""


def get_config_path() -> Path:
    """Get the configuration file path.

    ``$DTOOL_CONFIG`` wins, then ``$XDG_CONFIG_HOME/dtool/config.toml``,
    then ``~/.config/dtool/config.toml``.
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    base = os.environ.get(ENV_XDG_CONFIG_HOME) or Path.home() / ".config"
    return Path(base) / PROG_NAME / CONFIG_FILE_NAME
