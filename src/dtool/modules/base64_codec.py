"""Hex <-> base64 conversion."""

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex

URL_SAFE_ARG = Arg(
    "url_safe", "Use the URL-safe alphabet (- and _)", short="u", long="url-safe", flag=True
)


def h2b64(args: Mapping[str, Any]) -> list[str]:
    data = decode_hex(args["input"])
    if args.get("url_safe"):
        return [base64.urlsafe_b64encode(data).decode("ascii")]
    return [base64.b64encode(data).decode("ascii")]


def b642h(args: Mapping[str, Any]) -> list[str]:
    text = "".join(args["input"].split())
    altchars = b"-_" if args.get("url_safe") else None
    try:
        data = base64.b64decode(text, altchars=altchars, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Invalid base64: {e}") from e
    return [encode_hex(data)]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "h2b64",
                "Convert hex to base64",
                args=(URL_SAFE_ARG, Arg.input("Hex")),
            ),
            func=h2b64,
            cases=[
                Case(
                    desc="Convert hex to base64",
                    input=["0x616263"],
                    output=["YWJj"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert hex to base64",
                    input=["0xffef"],
                    output=["/+8="],
                    since="0.1.0",
                    is_example=False,
                ),
                Case(
                    desc="Convert hex to URL-safe base64",
                    input=["-u", "0xffef"],
                    output=["_-8="],
                    since="0.2.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "b642h",
                "Convert base64 to hex",
                args=(URL_SAFE_ARG, Arg.input("Base64")),
            ),
            func=b642h,
            cases=[
                Case(
                    desc="Convert base64 to hex",
                    input=["YWJj"],
                    output=["0x616263"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert URL-safe base64 to hex",
                    input=["-u", "_-8="],
                    output=["0xffef"],
                    since="0.2.0",
                ),
            ],
        ),
    ]


MODULE = Module("base64", "Hex / base64 conversion", commands)
