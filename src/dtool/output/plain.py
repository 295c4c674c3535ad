"""Plain text output formatter."""

from dtool.output.base import OutputData, OutputFormat, OutputFormatter


class PlainFormatter(OutputFormatter):
    """Each output line as-is, for piping into other commands.

    Errors are written as ``Error: <message>``. In verbose mode the
    metadata follows the lines after a ``---`` separator.
    """

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def format(self, data: OutputData) -> str:
        if not data.success:
            return f"Error: {data.error}"

        lines = list(data.content)
        if self._verbose and data.metadata:
            lines.append("---")
            lines.extend(f"{key}: {value}" for key, value in data.metadata.items())
        return "\n".join(lines)
