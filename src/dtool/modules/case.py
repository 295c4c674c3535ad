"""Identifier case conversion."""

import re
from collections.abc import Callable, Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module

# Splits "HTTPServer" into HTTP/Server and "helloWorld" into hello/World
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def words(text: str) -> list[str]:
    return _WORD.findall(text)


def _camel(ws: list[str]) -> str:
    if not ws:
        return ""
    return ws[0].lower() + "".join(w.capitalize() for w in ws[1:])


CONVERTERS: dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "title": lambda s: " ".join(w.capitalize() for w in words(s)),
    "camel": lambda s: _camel(words(s)),
    "pascal": lambda s: "".join(w.capitalize() for w in words(s)),
    "snake": lambda s: "_".join(w.lower() for w in words(s)),
    "shouty_snake": lambda s: "_".join(w.upper() for w in words(s)),
    "kebab": lambda s: "-".join(w.lower() for w in words(s)),
    "train": lambda s: "-".join(w.capitalize() for w in words(s)),
}


def convert(args: Mapping[str, Any]) -> list[str]:
    return [CONVERTERS[args["type"]](args["input"])]


def _case(kind: str, text: str, out: str, **kw: Any) -> Case:
    return Case(
        desc=f"Convert to {kind.replace('_', ' ')} case",
        input=["-t", kind, text],
        output=[out],
        since="0.2.0",
        **kw,
    )


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "case",
                "Convert case",
                args=(
                    Arg(
                        "type",
                        "Target case",
                        short="t",
                        long="type",
                        choices=tuple(CONVERTERS),
                        required=True,
                    ),
                    Arg.input("Text"),
                ),
            ),
            func=convert,
            cases=[
                _case("upper", "hello world", "HELLO WORLD"),
                _case("lower", "Hello World", "hello world"),
                _case("title", "hello_world", "Hello World"),
                _case("camel", "hello world", "helloWorld"),
                _case("pascal", "hello world", "HelloWorld"),
                _case("snake", "helloWorld", "hello_world"),
                _case("shouty_snake", "helloWorld", "HELLO_WORLD"),
                _case("kebab", "HTTPServer", "http-server"),
                _case("train", "hello_world", "Hello-World"),
                _case("snake", "parseHTTPResponse2", "parse_http_response2", is_example=False),
            ],
        ),
    ]


MODULE = Module("case", "Case conversion", commands)
