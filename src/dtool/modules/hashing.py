"""Message digests.

hashlib covers the SHA-1/SHA-2/SHA-3/BLAKE2 families; Keccak (the pre-NIST
SHA-3 padding) and RIPEMD-160 come from pycryptodome since OpenSSL builds
do not reliably ship them.
"""

import hashlib
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from Crypto.Hash import RIPEMD160, keccak

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.utils.codec import decode_hex, encode_hex

Digest = Callable[[bytes], bytes]


def _hashlib(name: str, data: bytes) -> bytes:
    return hashlib.new(name, data).digest()


def _keccak(bits: int, data: bytes) -> bytes:
    return keccak.new(digest_bits=bits, data=data).digest()


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


ALGORITHMS: dict[str, Digest] = {
    "md5": partial(_hashlib, "md5"),
    "sha1": partial(_hashlib, "sha1"),
    "sha2_224": partial(_hashlib, "sha224"),
    "sha2_256": partial(_hashlib, "sha256"),
    "sha2_384": partial(_hashlib, "sha384"),
    "sha2_512": partial(_hashlib, "sha512"),
    "sha3_224": partial(_hashlib, "sha3_224"),
    "sha3_256": partial(_hashlib, "sha3_256"),
    "sha3_384": partial(_hashlib, "sha3_384"),
    "sha3_512": partial(_hashlib, "sha3_512"),
    "keccak_224": partial(_keccak, 224),
    "keccak_256": partial(_keccak, 256),
    "keccak_384": partial(_keccak, 384),
    "keccak_512": partial(_keccak, 512),
    "ripemd_160": _ripemd160,
    "blake2b_512": partial(_hashlib, "blake2b"),
    "blake2s_256": partial(_hashlib, "blake2s"),
}

DEFAULT_ALGORITHM = "sha2_256"


def digest(algorithm: str, data: bytes) -> bytes:
    return ALGORITHMS[algorithm](data)


def hash_hex(args: Mapping[str, Any]) -> list[str]:
    algorithm = args.get("algorithm") or DEFAULT_ALGORITHM
    return [encode_hex(digest(algorithm, decode_hex(args["input"])))]


def _case(algorithm: str, data: str, out: str, since: str = "0.1.0", **kw: Any) -> Case:
    return Case(
        desc=f"Hash ({algorithm})",
        input=["-a", algorithm, data],
        output=["0x" + out],
        since=since,
        **kw,
    )


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "hash",
                "Hex to hash",
                args=(
                    Arg(
                        "algorithm",
                        "Hash algorithm",
                        short="a",
                        long="algorithm",
                        choices=tuple(ALGORITHMS),
                        default=DEFAULT_ALGORITHM,
                    ),
                    Arg.input("Hex data"),
                ),
            ),
            func=hash_hex,
            cases=[
                _case("md5", "0x616263", "900150983cd24fb0d6963f7d28e17f72"),
                _case(
                    "md5", "0x", "d41d8cd98f00b204e9800998ecf8427e", is_example=False
                ),
                _case("sha1", "0x616263", "a9993e364706816aba3e25717850c26c9cd0d89d"),
                _case(
                    "sha1",
                    "0x",
                    "da39a3ee5e6b4b0d3255bfef95601890afd80709",
                    is_example=False,
                ),
                _case(
                    "sha2_256",
                    "0x616263",
                    "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
                ),
                _case(
                    "sha2_256",
                    "0x",
                    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
                    is_example=False,
                ),
                _case(
                    "sha2_512",
                    "0x616263",
                    "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
                    "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f",
                ),
                _case(
                    "sha3_256",
                    "0x",
                    "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a",
                ),
                _case(
                    "keccak_256",
                    "0x",
                    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470",
                ),
                _case(
                    "ripemd_160",
                    "0x",
                    "9c1185a5c5e9fc54612808977ee8f548b2258d31",
                    since="0.2.0",
                ),
                _case(
                    "blake2b_512",
                    "0x",
                    "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
                    "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce",
                    since="0.2.0",
                ),
            ],
        ),
    ]


MODULE = Module("hash", "Hash (md5, sha1, sha2, sha3, keccak, ripemd, blake2)", commands)
