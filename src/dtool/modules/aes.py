"""AES encryption and decryption (ECB, CBC and CTR modes)."""

from collections.abc import Mapping
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex

MODES = ("ecb", "cbc", "ctr")
PADDINGS = ("pkcs7", "none")

KEY_SIZES = (16, 24, 32)
BLOCK_BITS = algorithms.AES.block_size


def _cipher(args: Mapping[str, Any]) -> Cipher:
    key = decode_hex(args["key"], "key")
    if len(key) not in KEY_SIZES:
        raise InvalidArgumentError(
            f"Invalid key length: {len(key)} bytes (expected 16, 24 or 32)"
        )

    mode_name = args.get("mode") or "ecb"
    if mode_name == "ecb":
        return Cipher(algorithms.AES(key), modes.ECB())

    if not args.get("iv"):
        raise InvalidArgumentError(f"Missing iv: required in {mode_name} mode")
    iv = decode_hex(args["iv"], "iv")
    if len(iv) != BLOCK_BITS // 8:
        raise InvalidArgumentError(f"Invalid iv length: {len(iv)} bytes (expected 16)")

    mode = modes.CBC(iv) if mode_name == "cbc" else modes.CTR(iv)
    return Cipher(algorithms.AES(key), mode)


def _padded(args: Mapping[str, Any]) -> bool:
    # CTR is a stream mode and never pads
    return args.get("mode") != "ctr" and (args.get("padding") or "pkcs7") == "pkcs7"


def encrypt(args: Mapping[str, Any]) -> list[str]:
    cipher = _cipher(args)
    data = decode_hex(args["input"], "plaintext")

    if _padded(args):
        padder = padding.PKCS7(BLOCK_BITS).padder()
        data = padder.update(data) + padder.finalize()

    encryptor = cipher.encryptor()
    try:
        out = encryptor.update(data) + encryptor.finalize()
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid plaintext: {e}") from e
    return [encode_hex(out)]


def decrypt(args: Mapping[str, Any]) -> list[str]:
    cipher = _cipher(args)
    data = decode_hex(args["input"], "ciphertext")

    decryptor = cipher.decryptor()
    try:
        out = decryptor.update(data) + decryptor.finalize()
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid ciphertext: {e}") from e

    if _padded(args):
        unpadder = padding.PKCS7(BLOCK_BITS).unpadder()
        try:
            out = unpadder.update(out) + unpadder.finalize()
        except ValueError as e:
            raise InvalidArgumentError("Invalid padding") from e
    return [encode_hex(out)]


def _args(data_help: str) -> tuple[Arg, ...]:
    return (
        Arg("key", "Key (hex, 16, 24 or 32 bytes)", short="k", long="key", required=True),
        Arg("mode", "Block cipher mode", short="m", long="mode", choices=MODES, default="ecb"),
        Arg("iv", "IV (hex, 16 bytes; cbc and ctr only)", short="i", long="iv"),
        Arg(
            "padding",
            "Padding (ecb and cbc only)",
            short="p",
            long="padding",
            choices=PADDINGS,
            default="pkcs7",
        ),
        Arg.input(data_help),
    )


KEY = "0x2b7e151628aed2a6abf7158809cf4f3c"
PLAINTEXT = "0x6bc1bee22e409f96e93d7e117393172a"
CBC_IV = "0x000102030405060708090a0b0c0d0e0f"
CTR_IV = "0xf0f1f2f3f4f5f6f7f8f9fafbfcfdfeff"

# NIST SP 800-38A, first block of each mode
VECTORS = (
    ("ecb", [], "0x3ad77bb40d7a3660a89ecaf32466ef97"),
    ("cbc", ["-i", CBC_IV], "0x7649abac8119b246cee98e9b12e9197d"),
    ("ctr", ["-i", CTR_IV], "0x874d6191b620e3261bef6864990db6ce"),
)


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "aes_enc", "AES encrypt", args=_args("Plaintext (hex)")
            ),
            func=encrypt,
            cases=[
                Case(
                    desc=f"AES encrypt ({mode})",
                    input=["-k", KEY, "-m", mode, *iv, "-p", "none", PLAINTEXT],
                    output=[out],
                    since="0.2.0",
                )
                for mode, iv, out in VECTORS
            ],
        ),
        Command(
            schema=CommandSchema(
                "aes_dec", "AES decrypt", args=_args("Ciphertext (hex)")
            ),
            func=decrypt,
            cases=[
                Case(
                    desc=f"AES decrypt ({mode})",
                    input=["-k", KEY, "-m", mode, *iv, "-p", "none", out],
                    output=[PLAINTEXT],
                    since="0.2.0",
                )
                for mode, iv, out in VECTORS
            ],
        ),
    ]


MODULE = Module("aes", "AES encrypt / decrypt", commands)
