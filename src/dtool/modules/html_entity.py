"""HTML entity escaping."""

import html
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module


def he(args: Mapping[str, Any]) -> list[str]:
    return [html.escape(args["input"])]


def hd(args: Mapping[str, Any]) -> list[str]:
    return [html.unescape(args["input"])]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema("he", "HTML entity encode", args=(Arg.input("Text"),)),
            func=he,
            cases=[
                Case(
                    desc="HTML entity encode",
                    input=["<b>a&b</b>"],
                    output=["&lt;b&gt;a&amp;b&lt;/b&gt;"],
                    since="0.1.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema("hd", "HTML entity decode", args=(Arg.input("Text"),)),
            func=hd,
            cases=[
                Case(
                    desc="HTML entity decode",
                    input=["&lt;b&gt;a&amp;b&lt;/b&gt;"],
                    output=["<b>a&b</b>"],
                    since="0.1.0",
                ),
                Case(
                    desc="Named entities are decoded",
                    input=["&copy; 2024"],
                    output=["\u00a9 2024"],
                    since="0.1.0",
                    is_example=False,
                ),
            ],
        ),
    ]


MODULE = Module("html", "HTML entity encode / decode", commands)
