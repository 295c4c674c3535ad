"""Global options accepted before the subcommand name.

    dtool [--format FORMAT] [--verbose] [--log-level LEVEL] <command> ...

Each option falls back to the configuration when omitted.
"""

import click

from dtool.output.base import OutputFormat

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

format_option = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    help="Output format. Defaults to the config setting.",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Include execution metadata (module, line count, run time) in the output.",
)

log_level_option = click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Diagnostics written to stderr. Defaults to the config setting.",
)


def resolve_format(
    requested: OutputFormat | str | None,
    configured: OutputFormat | str,
) -> OutputFormat:
    """The --format value if given, otherwise the configured default."""
    return OutputFormat(requested or configured)
