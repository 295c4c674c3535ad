"""Hex <-> UTF-8 string conversion."""

from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.utils.codec import decode_hex, decode_utf8, encode_hex, encode_utf8


def h2s(args: Mapping[str, Any]) -> list[str]:
    return [decode_utf8(decode_hex(args["input"]))]


def s2h(args: Mapping[str, Any]) -> list[str]:
    return [encode_hex(encode_utf8(args["input"]))]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "h2s", "Convert hex to UTF-8 string", args=(Arg.input("Hex string"),)
            ),
            func=h2s,
            cases=[
                Case(
                    desc="Convert hex to UTF-8 string",
                    input=["0x61626364"],
                    output=["abcd"],
                    since="0.1.0",
                ),
                Case(
                    desc="The 0x prefix is optional",
                    input=["68656c6c6f"],
                    output=["hello"],
                    since="0.1.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "s2h", "Convert UTF-8 string to hex", args=(Arg.input("String"),)
            ),
            func=s2h,
            cases=[
                Case(
                    desc="Convert UTF-8 string to hex",
                    input=["abcd"],
                    output=["0x61626364"],
                    since="0.1.0",
                ),
            ],
        ),
    ]


MODULE = Module("hex", "Hex / UTF-8 string conversion", commands)
