"""Number system conversion."""

from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.utils.codec import parse_int

# (argument name, short, long, renderer), in output order
SYSTEMS = (
    ("decimal", "d", "decimal", str),
    ("binary", "b", "binary", bin),
    ("octal", "o", "octal", oct),
    ("hexadecimal", "x", "hexadecimal", hex),
)


def ns(args: Mapping[str, Any]) -> list[str]:
    number = parse_int(args["input"])
    selected = [render for name, _, _, render in SYSTEMS if args.get(name)]
    if not selected:
        selected = [render for _, _, _, render in SYSTEMS]
    return [render(number) for render in selected]


def commands() -> list[Command]:
    flags = tuple(
        Arg(name, f"Output {name}", short=short, long=long, flag=True)
        for name, short, long, _ in SYSTEMS
    )
    return [
        Command(
            schema=CommandSchema(
                "ns",
                "Number system conversion",
                args=(
                    *flags,
                    Arg.input("Number, optionally prefixed with 0b, 0o or 0x"),
                ),
            ),
            func=ns,
            cases=[
                Case(
                    desc="Output all number systems",
                    input=["256"],
                    output=["256", "0b100000000", "0o400", "0x100"],
                    since="0.1.0",
                ),
                Case(
                    desc="Output decimal",
                    input=["-d", "0x100"],
                    output=["256"],
                    since="0.1.0",
                ),
                Case(
                    desc="Output hexadecimal",
                    input=["-x", "0b11"],
                    output=["0x3"],
                    since="0.1.0",
                ),
                Case(
                    desc="Output binary",
                    input=["-b", "0o17"],
                    output=["0b1111"],
                    since="0.1.0",
                ),
                Case(
                    desc="Output a negative number (after --)",
                    input=["-x", "--", "-255"],
                    output=["-0xff"],
                    since="0.3.0",
                ),
            ],
        ),
    ]


MODULE = Module("number_system", "Number system", commands)
