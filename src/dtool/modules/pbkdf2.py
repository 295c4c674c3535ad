"""PBKDF2 key derivation (RFC 8018) with HMAC-SHA1/SHA2."""

import hashlib
from collections.abc import Mapping
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex, parse_positive_int

DIGESTS = {
    "sha1": "sha1",
    "sha2_224": "sha224",
    "sha2_256": "sha256",
    "sha2_384": "sha384",
    "sha2_512": "sha512",
}


def pbkdf2(args: Mapping[str, Any]) -> list[str]:
    digest = DIGESTS[args.get("algorithm") or "sha2_256"]
    salt = decode_hex(args.get("salt") or "0x", "salt")
    iterations = parse_positive_int(args.get("iterations") or "2", "iterations")
    length = parse_positive_int(args.get("length") or "32", "key length")
    password = decode_hex(args["input"], "password")

    # dkLen <= (2^32 - 1) * hLen
    max_length = (2**32 - 1) * hashlib.new(digest).digest_size
    if length > max_length:
        raise InvalidArgumentError(f"Invalid key length: at most {max_length}, got {length}")

    try:
        key = hashlib.pbkdf2_hmac(digest, password, salt, iterations, dklen=length)
    except (OverflowError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid PBKDF2 parameters: {e}") from e
    return [encode_hex(key)]


def _case(desc: str, algorithm: str, iterations: str, length: str, out: str) -> Case:
    return Case(
        desc=desc,
        input=[
            "-a", algorithm,
            "-s", "0x73616c74",
            "-i", iterations,
            "-l", length,
            "0x70617373776f7264",
        ],
        output=[out],
        since="0.2.0",
    )


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "pbkdf2",
                "Derive a key with PBKDF2",
                args=(
                    Arg(
                        "algorithm",
                        "Hash algorithm",
                        short="a",
                        long="algorithm",
                        choices=tuple(DIGESTS),
                        default="sha2_256",
                    ),
                    Arg("salt", "Salt (hex)", short="s", long="salt", default="0x"),
                    Arg(
                        "iterations",
                        "Iteration count",
                        short="i",
                        long="iterations",
                        default="2",
                    ),
                    Arg(
                        "length",
                        "Derived key length in bytes",
                        short="l",
                        long="length",
                        default="32",
                    ),
                    Arg.input("Password (hex)"),
                ),
            ),
            func=pbkdf2,
            cases=[
                _case(
                    "Derive a key (sha1, 1 iteration)",
                    "sha1",
                    "1",
                    "20",
                    "0x0c60c80f961f0e71f3a9b524af6012062fe037a6",
                ),
                _case(
                    "Derive a key (sha1, 2 iterations)",
                    "sha1",
                    "2",
                    "20",
                    "0xea6c014dc72d6f8ccd1ed92ace1d41f0d8de8957",
                ),
                _case(
                    "Derive a key (sha2_256)",
                    "sha2_256",
                    "1",
                    "32",
                    "0x120fb6cffcf8b32c43e7225256c4f837a86548c92ccc35480805987cb70be17b",
                ),
            ],
        ),
    ]


MODULE = Module("pbkdf2", "PBKDF2", commands)
