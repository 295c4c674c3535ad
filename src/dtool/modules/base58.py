"""Base58 and Base58Check codecs (Bitcoin alphabet)."""

import hashlib
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}

CHECKSUM_LEN = 4


def b58encode(data: bytes) -> str:
    """Encode bytes as base58; each leading zero byte becomes a '1'."""
    stripped = data.lstrip(b"\0")
    zeros = len(data) - len(stripped)

    n = int.from_bytes(stripped, "big")
    digits = []
    while n:
        n, rem = divmod(n, 58)
        digits.append(ALPHABET[rem])
    return ALPHABET[0] * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text.

    Raises:
        InvalidArgumentError: On a character outside the alphabet.
    """
    stripped = text.lstrip(ALPHABET[0])
    zeros = len(text) - len(stripped)

    n = 0
    for ch in stripped:
        try:
            n = n * 58 + _INDEX[ch]
        except KeyError:
            raise InvalidArgumentError(f"Invalid base58 character: {ch!r}") from None
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b""
    return b"\0" * zeros + body


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:CHECKSUM_LEN]


def b58check_encode(data: bytes) -> str:
    return b58encode(data + _checksum(data))


def b58check_decode(text: str) -> bytes:
    raw = b58decode(text)
    if len(raw) < CHECKSUM_LEN:
        raise InvalidArgumentError("Invalid base58check: too short")
    data, checksum = raw[:-CHECKSUM_LEN], raw[-CHECKSUM_LEN:]
    if _checksum(data) != checksum:
        raise InvalidArgumentError("Invalid checksum")
    return data


def h2b58(args: Mapping[str, Any]) -> list[str]:
    return [b58encode(decode_hex(args["input"]))]


def h2b58c(args: Mapping[str, Any]) -> list[str]:
    return [b58check_encode(decode_hex(args["input"]))]


def b582h(args: Mapping[str, Any]) -> list[str]:
    return [encode_hex(b58decode(args["input"].strip()))]


def b58c2h(args: Mapping[str, Any]) -> list[str]:
    return [encode_hex(b58check_decode(args["input"].strip()))]


ADDRESS_HEX = "0x00010966776006953d5567439e5e39f86a0d273bee"
ADDRESS = "16UwLL9Risc3QfPqBUvKofHmBQ7wMtjvM"


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "h2b58", "Convert hex to base58", args=(Arg.input("Hex"),)
            ),
            func=h2b58,
            cases=[
                Case(
                    desc="Convert hex to base58",
                    input=["0x626262"],
                    output=["a3gV"],
                    since="0.1.0",
                ),
                Case(
                    desc="Leading zero bytes become '1'",
                    input=["0x00000000000000000000"],
                    output=["1111111111"],
                    since="0.1.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "h2b58c", "Convert hex to base58check", args=(Arg.input("Hex"),)
            ),
            func=h2b58c,
            cases=[
                Case(
                    desc="Convert hex to base58check",
                    input=[ADDRESS_HEX],
                    output=[ADDRESS],
                    since="0.1.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "b582h", "Convert base58 to hex", args=(Arg.input("Base58"),)
            ),
            func=b582h,
            cases=[
                Case(
                    desc="Convert base58 to hex",
                    input=["a3gV"],
                    output=["0x626262"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert base58 to hex",
                    input=["2g"],
                    output=["0x61"],
                    since="0.1.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "b58c2h", "Convert base58check to hex", args=(Arg.input("Base58check"),)
            ),
            func=b58c2h,
            cases=[
                Case(
                    desc="Convert base58check to hex",
                    input=[ADDRESS],
                    output=[ADDRESS_HEX],
                    since="0.1.0",
                ),
            ],
        ),
    ]


MODULE = Module("base58", "Hex / base58 conversion", commands)
