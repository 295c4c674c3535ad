"""URL percent-encoding."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import encode_utf8


def ue(args: Mapping[str, Any]) -> list[str]:
    return [quote(encode_utf8(args["input"]), safe="")]


def ud(args: Mapping[str, Any]) -> list[str]:
    try:
        return [unquote(args["input"], errors="strict")]
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"Invalid url encoding: {e}") from e


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema("ue", "URL encode", args=(Arg.input("Text"),)),
            func=ue,
            cases=[
                Case(
                    desc="URL encode",
                    input=["a+b c"],
                    output=["a%2Bb%20c"],
                    since="0.1.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema("ud", "URL decode", args=(Arg.input("Text"),)),
            func=ud,
            cases=[
                Case(
                    desc="URL decode",
                    input=["a%2Bb%20c"],
                    output=["a+b c"],
                    since="0.1.0",
                ),
            ],
        ),
    ]


MODULE = Module("url", "URL encode / decode", commands)
