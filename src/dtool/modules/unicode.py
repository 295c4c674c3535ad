"""String <-> unicode escape sequences."""

import re
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError

FORMATS = ("default", "html", "html_d", "rust")

_ESCAPE = re.compile(
    r"\\u\{(?P<rust>[0-9a-fA-F]{1,6})\}"
    r"|\\u(?P<u4>[0-9a-fA-F]{4})"
    r"|\\U(?P<u8>[0-9a-fA-F]{8})"
    r"|&#[xX](?P<html>[0-9a-fA-F]+);"
    r"|&#(?P<html_d>[0-9]+);"
)


def escape(ch: str, fmt: str) -> str:
    cp = ord(ch)
    if fmt == "html":
        return f"&#x{cp:x};"
    if fmt == "html_d":
        return f"&#{cp};"
    if fmt == "rust":
        return f"\\u{{{cp:x}}}"
    if cp > 0xFFFF:
        return f"\\U{cp:08x}"
    return f"\\u{cp:04x}"


def _unescape(match: re.Match[str]) -> str:
    if match["html_d"] is not None:
        cp = int(match["html_d"])
    else:
        digits = match["rust"] or match["u4"] or match["u8"] or match["html"]
        cp = int(digits, 16)
    if cp > 0x10FFFF:
        raise InvalidArgumentError(f"Invalid code point: {match.group(0)}")
    return chr(cp)


def s2u(args: Mapping[str, Any]) -> list[str]:
    fmt = args.get("format") or "default"
    return ["".join(escape(ch, fmt) for ch in args["input"])]


def u2s(args: Mapping[str, Any]) -> list[str]:
    text = _ESCAPE.sub(_unescape, args["input"])
    # Join UTF-16 surrogate pairs written as two \u escapes
    try:
        text = text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"Invalid surrogate pair: {e}") from e
    return [text]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "s2u",
                "Convert string to unicode escapes",
                args=(
                    Arg(
                        "format",
                        "Escape format",
                        short="f",
                        long="format",
                        choices=FORMATS,
                        default="default",
                    ),
                    Arg.input("String"),
                ),
            ),
            func=s2u,
            cases=[
                Case(
                    desc="Convert string to unicode",
                    input=["abc"],
                    output=["\\u0061\\u0062\\u0063"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert string to html escapes",
                    input=["-f", "html", "abc"],
                    output=["&#x61;&#x62;&#x63;"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert string to decimal html escapes",
                    input=["-f", "html_d", "abc"],
                    output=["&#97;&#98;&#99;"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert string to rust escapes",
                    input=["-f", "rust", "abc"],
                    output=["\\u{61}\\u{62}\\u{63}"],
                    since="0.1.0",
                ),
                Case(
                    desc="Characters beyond the BMP use \\U",
                    input=["\U0001f600"],
                    output=["\\U0001f600"],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "u2s",
                "Convert unicode escapes to string",
                args=(Arg.input("Escaped string, in any supported format"),),
            ),
            func=u2s,
            cases=[
                Case(
                    desc="Convert unicode to string",
                    input=["\\u0061\\u0062\\u0063"],
                    output=["abc"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert html escapes to string",
                    input=["&#x61;&#98;c"],
                    output=["abc"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert rust escapes to string",
                    input=["\\u{61}\\u{62}\\u{63}"],
                    output=["abc"],
                    since="0.1.0",
                ),
                Case(
                    desc="Surrogate pairs are joined",
                    input=["\\ud83d\\ude00"],
                    output=["\U0001f600"],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
    ]


MODULE = Module("unicode", "Unicode escape", commands)
