"""CLI layer for dtool.

This module provides the command-line interface for dtool, a click root
group carrying the global options with one subcommand per registered
command schema.

Usage:
    # Run a command
    dtool h2s 0x61626364

    # Read the input from stdin
    echo -n abc | dtool s2h

    # Show every example
    dtool usage
"""

from dtool.cli.app import build_cli, create_root, main
from dtool.cli.context import CliState, create_formatter, create_state
from dtool.cli.options import (
    format_option,
    log_level_option,
    resolve_format,
    verbose_option,
)

__all__ = [
    # App
    "build_cli",
    "create_root",
    "main",
    # Context
    "CliState",
    "create_formatter",
    "create_state",
    # Options
    "format_option",
    "log_level_option",
    "resolve_format",
    "verbose_option",
]
