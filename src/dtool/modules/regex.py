"""Regex matching."""

import re
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError


def match(args: Mapping[str, Any]) -> list[str]:
    """List every match, each followed by its capture groups."""
    try:
        pattern = re.compile(args["pattern"])
    except re.error as e:
        raise InvalidArgumentError(f"Invalid pattern: {e}") from e

    lines = []
    for m in pattern.finditer(args["input"]):
        lines.append(m.group(0))
        for i, group in enumerate(m.groups(), start=1):
            lines.append(f"    group#{i}: {group or ''}")
    return lines


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "re",
                "Regex match",
                args=(
                    Arg(
                        "pattern",
                        "Regex pattern",
                        short="p",
                        long="pattern",
                        required=True,
                    ),
                    Arg.input("Text"),
                ),
            ),
            func=match,
            cases=[
                Case(
                    desc="Regex match",
                    input=["-p", "[0-9]+", "a1b22c333"],
                    output=["1", "22", "333"],
                    since="0.1.0",
                ),
                Case(
                    desc="Regex match with groups",
                    input=["-p", "a(.)c", "abcadc"],
                    output=["abc", "    group#1: b", "adc", "    group#1: d"],
                    since="0.1.0",
                ),
            ],
        ),
    ]


MODULE = Module("re", "Regex", commands)
