"""Logging setup for dtool.

Everything is logged under the ``dtool`` logger and written to stderr (and
optionally a file), never to stdout, which carries command output only.
Context passed to ``log_with_context`` travels on the record as
``record.context`` and is rendered by both formatters.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOGGER_NAME = "dtool"

logger = logging.getLogger(LOGGER_NAME)


def _context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """``LEVEL name: message key=value ...``, optionally colored by level."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        text = f"{level} {record.name}: {record.getMessage()}"
        context = _context(record)
        if context:
            text += " " + " ".join(f"{key}={value}" for key, value in context.items())
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def _parse_level(level: str) -> int | None:
    value = logging.getLevelNamesMapping().get(level.upper())
    return value if isinstance(value, int) else None


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the ``dtool`` logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). An
            unknown name falls back to WARNING and is reported.
        log_file: Optional file receiving the same records as JSON.
        json_format: Write JSON records to stderr instead of console text.
        use_color: Color the level names on stderr.

    Returns:
        The configured ``dtool`` logger.
    """
    numeric_level = _parse_level(level)

    logger.setLevel(numeric_level or logging.WARNING)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        JSONFormatter() if json_format else ConsoleFormatter(use_color=use_color)
    )
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    if numeric_level is None:
        logger.warning("Unknown log level %r, using WARNING", level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module.

    Args:
        name: Module name (e.g., 'dtool.commands.manager').

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log a message with key-value context attached to the record.

    Args:
        logger: Logger instance.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **context: Key-value pairs rendered after the message.
    """
    logger.log(level, message, extra={"context": context}, stacklevel=2)
