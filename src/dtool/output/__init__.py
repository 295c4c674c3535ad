"""Output formatting (plain, JSON, rich).

This module provides the formatters that print a command's output lines,
or its error, in the format chosen with ``--format``.

Usage:
    from dtool.output import OutputData, get_formatter

    formatter = get_formatter("plain")
    formatter.print(OutputData.from_content(["0x616263"], title="s2h"))
"""

from typing import TextIO

from dtool.output.base import OutputData, OutputFormat, OutputFormatter
from dtool.output.json_fmt import JSONFormatter
from dtool.output.plain import PlainFormatter
from dtool.output.rich_fmt import RichFormatter

__all__ = [
    # Base classes
    "OutputFormatter",
    "OutputData",
    "OutputFormat",
    # Formatters
    "PlainFormatter",
    "JSONFormatter",
    "RichFormatter",
    "FORMATTERS",
    "get_formatter",
]

FORMATTERS: dict[OutputFormat, type[OutputFormatter]] = {
    OutputFormat.PLAIN: PlainFormatter,
    OutputFormat.JSON: JSONFormatter,
    OutputFormat.RICH: RichFormatter,
}


def get_formatter(
    format_type: OutputFormat | str,
    verbose: bool = False,
    *,
    color: bool = True,
    stream: TextIO | None = None,
    error_stream: TextIO | None = None,
) -> OutputFormatter:
    """Get a formatter instance by format type.

    Args:
        format_type: The output format to use (case-insensitive name).
        verbose: Whether to show metadata.
        color: Whether the rich formatter may emit colors. Plain and JSON
            output never contain escape sequences.
        stream: Output stream (defaults to stdout).
        error_stream: Error stream (defaults to stderr).

    Returns:
        An OutputFormatter instance.

    Raises:
        ValueError: If format_type is not recognized.
    """
    if isinstance(format_type, str):
        format_type = OutputFormat(format_type.lower())

    if format_type == OutputFormat.RICH:
        return RichFormatter(stream, error_stream, verbose, color=color)
    return FORMATTERS[format_type](stream, error_stream, verbose)
