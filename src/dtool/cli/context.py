"""Per-invocation CLI state.

The root callback builds a CliState from the global options and the
configuration; every subcommand reads it from the click context.
"""

from dataclasses import dataclass

from dtool.cli.options import resolve_format
from dtool.config import get_config
from dtool.config.schema import DToolConfig
from dtool.output import get_formatter
from dtool.output.base import OutputFormat, OutputFormatter


@dataclass
class CliState:
    """Options shared by every subcommand of one invocation."""

    formatter: OutputFormatter
    config: DToolConfig
    verbose: bool = False


def create_formatter(
    output_format: OutputFormat | str | None = None,
    verbose: bool = False,
    config: DToolConfig | None = None,
) -> OutputFormatter:
    """Create an output formatter from configuration.

    Args:
        output_format: The --format value, if given.
        verbose: Whether to enable verbose output.
        config: Configuration to use. If None, uses global config.

    Returns:
        Configured OutputFormatter instance.
    """
    if config is None:
        config = get_config()

    chosen = resolve_format(output_format, config.output.default_format)
    return get_formatter(chosen, verbose=verbose, color=config.output.color)


def create_state(
    output_format: OutputFormat | str | None = None,
    verbose: bool = False,
    config: DToolConfig | None = None,
) -> CliState:
    """Create the CLI state from the global options."""
    if config is None:
        config = get_config()

    return CliState(
        formatter=create_formatter(output_format, verbose, config),
        config=config,
        verbose=verbose,
    )
