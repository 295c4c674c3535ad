"""JSON output formatter."""

import json
from typing import Any, TextIO

from dtool.output.base import OutputData, OutputFormat, OutputFormatter


class JSONFormatter(OutputFormatter):
    """One JSON document per invocation.

    A success is ``{"success": true, "command": ..., "output": [lines]}``;
    a failure is ``{"success": false, "command": ..., "error": ...,
    "exit_code": ...}`` and goes to the error stream. Metadata is added
    under ``"metadata"`` in verbose mode.
    """

    prints_empty = True

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to include metadata.
            indent: JSON indentation (None for a single line).
        """
        super().__init__(stream, error_stream, verbose)
        self._indent = indent

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def to_dict(self, data: OutputData) -> dict[str, Any]:
        document: dict[str, Any] = {"success": data.success}
        if data.title:
            document["command"] = data.title

        if data.success:
            document["output"] = list(data.content)
        else:
            document["error"] = data.error
            document["exit_code"] = data.exit_code

        if self._verbose and data.metadata:
            document["metadata"] = data.metadata
        return document

    def format(self, data: OutputData) -> str:
        # Decoded strings are kept readable rather than \u-escaped
        return json.dumps(
            self.to_dict(data), indent=self._indent, ensure_ascii=False, default=str
        )
