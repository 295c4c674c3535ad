"""Output formatter protocol and base classes.

A formatter renders one command result: its output lines on the output
stream, or its error on the error stream. Nothing else is ever written to
the output stream, so plain output can be piped into another command.
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO


class OutputFormat(str, Enum):
    """Supported output formats."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


@dataclass
class OutputData:
    """One command result, ready to be formatted.

    Attributes:
        content: Output lines, in order.
        title: The command name, if known.
        metadata: Additional metadata about the execution.
        error: Error message if the command failed.
        success: Whether the command succeeded.
        exit_code: Process exit code of a failed command.
    """

    content: list[str] = field(default_factory=list)
    title: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    success: bool = True
    exit_code: int = 0

    @classmethod
    def from_error(
        cls, error: str, title: str | None = None, exit_code: int = 1
    ) -> "OutputData":
        """Create an OutputData instance for an error."""
        return cls(title=title, error=error, success=False, exit_code=exit_code)

    @classmethod
    def from_content(
        cls,
        content: list[str],
        title: str | None = None,
        **metadata: Any,
    ) -> "OutputData":
        """Create an OutputData instance for successful output."""
        return cls(content=list(content), title=title, metadata=metadata)


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    # Whether a successful result without lines still produces a document
    prints_empty: bool = False

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout).
            error_stream: Error stream (defaults to stderr).
            verbose: Whether to show metadata.
        """
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""

    @abstractmethod
    def format(self, data: OutputData) -> str:
        """Render a result as text, without a trailing newline."""

    def print(self, data: OutputData) -> None:
        """Render a result to the stream it belongs to.

        Args:
            data: The result to print.
        """
        if data.success and not data.content and not self.prints_empty:
            return
        target = self._stream if data.success else self._error_stream
        print(self.format(data), file=target)
