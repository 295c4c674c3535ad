"""Rich terminal output formatter."""

from typing import TextIO

from rich.console import Console
from rich.text import Text

from dtool.output.base import OutputData, OutputFormat, OutputFormatter


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Output lines are printed verbatim (no wrapping, markup or
    highlighting, so hex and base64 strings stay copyable); errors are
    rendered in bold red.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            color: Whether to emit colors.
        """
        super().__init__(stream, error_stream, verbose)
        self._color = color
        self._console: Console | None = None
        self._error_console: Console | None = None

    def _get_console(self) -> Console:
        """Lazily initialize and return the Rich console."""
        if self._console is None:
            self._console = Console(
                file=self._stream,
                no_color=not self._color,
                highlight=False,
                soft_wrap=True,
            )
        return self._console

    def _get_error_console(self) -> Console:
        """Lazily initialize and return the error console."""
        if self._error_console is None:
            self._error_console = Console(
                file=self._error_stream,
                stderr=True,
                no_color=not self._color,
                highlight=False,
                soft_wrap=True,
            )
        return self._error_console

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, data: OutputData) -> Text:
        if not data.success:
            return Text(f"Error: {data.error}", style="bold red")

        text = Text("\n".join(data.content))
        if self._verbose and data.metadata:
            for key, value in data.metadata.items():
                text.append(f"\n{key}: {value}", style="dim")
        return text

    def format(self, data: OutputData) -> str:
        """Format output data as plain text (styles are dropped)."""
        return self._render(data).plain

    def print(self, data: OutputData) -> None:
        """Print output using the Rich console directly."""
        if data.success and not data.content:
            return
        console = self._get_console() if data.success else self._get_error_console()
        console.print(self._render(data))
