"""Pydantic models for dtool configuration."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from dtool.output.base import OutputFormat


class OutputConfig(BaseModel):
    """How command results are printed."""

    default_format: OutputFormat = Field(
        default=OutputFormat.PLAIN,
        description="Format used when --format is not given",
    )
    color: bool = Field(default=True, description="Allow colors on a terminal")


class LoggingConfig(BaseModel):
    """Diagnostics written to stderr (never to stdout)."""

    level: str = "WARNING"
    file: Path | None = Field(default=None, description="Also log JSON records here")
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level


class DToolConfig(BaseModel):
    """Root configuration, read from ``config.toml``."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
