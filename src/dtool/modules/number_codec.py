"""Number codecs: little-endian fixed width and SCALE compact.

The compact format packs an unsigned integer in 1, 2 or 4 bytes with a
two-bit mode marker in the lowest bits of the first byte, and falls back to
a length-prefixed big-integer form above 2**30 - 1.
"""

from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex, parse_int

# Fixed widths in bytes
WIDTHS = {"u8": 1, "u16": 2, "u32": 4, "u64": 8, "u128": 16}
COMPACT = "c"

TYPE_ARG = Arg(
    "type",
    "Number type: u8, u16, u32, u64, u128, or c (compact)",
    short="t",
    long="type",
    choices=(*WIDTHS, COMPACT),
    default="u32",
)

_SINGLE_MAX = 2**6 - 1
_TWO_MAX = 2**14 - 1
_FOUR_MAX = 2**30 - 1
_BIG_MAX = 2 ** (8 * 67) - 1


def compact_encode(n: int) -> bytes:
    """Encode an unsigned integer in SCALE compact form."""
    if n < 0:
        raise InvalidArgumentError(f"Invalid number: compact is unsigned, got {n}")
    if n <= _SINGLE_MAX:
        return bytes([n << 2])
    if n <= _TWO_MAX:
        return ((n << 2) | 0b01).to_bytes(2, "little")
    if n <= _FOUR_MAX:
        return ((n << 2) | 0b10).to_bytes(4, "little")
    if n > _BIG_MAX:
        raise InvalidArgumentError(f"Invalid number: {n} is too large for compact")

    body = n.to_bytes((n.bit_length() + 7) // 8, "little")
    return bytes([((len(body) - 4) << 2) | 0b11]) + body


def compact_decode(data: bytes) -> int:
    """Decode a SCALE compact integer; the whole input must be consumed."""
    if not data:
        raise InvalidArgumentError("Invalid compact: empty input")

    mode = data[0] & 0b11
    if mode == 0b11:
        length = (data[0] >> 2) + 4
        body = data[1:]
    else:
        length = {0b00: 1, 0b01: 2, 0b10: 4}[mode]
        body = data

    if len(body) != length:
        raise InvalidArgumentError(
            f"Invalid compact: expected {length} bytes, got {len(body)}"
        )
    n = int.from_bytes(body, "little")
    return n if mode == 0b11 else n >> 2


def ne(args: Mapping[str, Any]) -> list[str]:
    kind = args.get("type") or "u32"
    n = parse_int(args["input"])

    if kind == COMPACT:
        return [encode_hex(compact_encode(n))]

    width = WIDTHS[kind]
    try:
        return [encode_hex(n.to_bytes(width, "little"))]
    except OverflowError as e:
        raise InvalidArgumentError(f"Invalid number: {n} is out of range for {kind}") from e


def nd(args: Mapping[str, Any]) -> list[str]:
    kind = args.get("type") or "u32"
    data = decode_hex(args["input"])

    if kind == COMPACT:
        return [str(compact_decode(data))]

    width = WIDTHS[kind]
    if len(data) != width:
        raise InvalidArgumentError(
            f"Invalid {kind}: expected {width} bytes, got {len(data)}"
        )
    return [str(int.from_bytes(data, "little"))]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "ne", "Number encode", args=(TYPE_ARG, Arg.input("Number"))
            ),
            func=ne,
            cases=[
                Case(
                    desc="Encode u8",
                    input=["-t", "u8", "1"],
                    output=["0x01"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode u16",
                    input=["-t", "u16", "1"],
                    output=["0x0100"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode u32",
                    input=["-t", "u32", "1"],
                    output=["0x01000000"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode u64",
                    input=["-t", "u64", "1"],
                    output=["0x0100000000000000"],
                    since="0.1.0",
                    is_example=False,
                ),
                Case(
                    desc="Encode compact (single byte)",
                    input=["-t", "c", "6"],
                    output=["0x18"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode compact (two bytes)",
                    input=["-t", "c", "64"],
                    output=["0x0101"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode compact (two bytes)",
                    input=["-t", "c", "16383"],
                    output=["0xfdff"],
                    since="0.1.0",
                    is_example=False,
                ),
                Case(
                    desc="Encode compact (four bytes)",
                    input=["-t", "c", "16384"],
                    output=["0x02000100"],
                    since="0.1.0",
                ),
                Case(
                    desc="Encode compact (big integer)",
                    input=["-t", "c", "1073741824"],
                    output=["0x0300000040"],
                    since="0.1.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "nd", "Number decode", args=(TYPE_ARG, Arg.input("Hex"))
            ),
            func=nd,
            cases=[
                Case(
                    desc="Decode u8",
                    input=["-t", "u8", "0x01"],
                    output=["1"],
                    since="0.1.0",
                ),
                Case(
                    desc="Decode u16",
                    input=["-t", "u16", "0x0100"],
                    output=["1"],
                    since="0.1.0",
                ),
                Case(
                    desc="Decode u32",
                    input=["-t", "u32", "0x01000000"],
                    output=["1"],
                    since="0.1.0",
                ),
                Case(
                    desc="Decode compact",
                    input=["-t", "c", "0x18"],
                    output=["6"],
                    since="0.1.0",
                ),
                Case(
                    desc="Decode compact (four bytes)",
                    input=["-t", "c", "0x02000100"],
                    output=["16384"],
                    since="0.1.0",
                    is_example=False,
                ),
                Case(
                    desc="Decode compact (big integer)",
                    input=["-t", "c", "0x0300000040"],
                    output=["1073741824"],
                    since="0.1.0",
                ),
            ],
        ),
    ]


MODULE = Module("number_codec", "Number codec", commands)
