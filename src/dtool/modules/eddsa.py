"""Ed25519 signatures (RFC 8032)."""

from collections.abc import Mapping
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex

KEY_LEN = 32
SIG_LEN = 64


def _secret_key(text: str) -> Ed25519PrivateKey:
    raw = decode_hex(text, "secret key")
    if len(raw) != KEY_LEN:
        raise InvalidArgumentError(
            f"Invalid secret key length: {len(raw)} bytes (expected {KEY_LEN})"
        )
    return Ed25519PrivateKey.from_private_bytes(raw)


def _public_key(text: str) -> Ed25519PublicKey:
    raw = decode_hex(text, "public key")
    if len(raw) != KEY_LEN:
        raise InvalidArgumentError(
            f"Invalid public key length: {len(raw)} bytes (expected {KEY_LEN})"
        )
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid public key: {e}") from e


def _public_hex(key: Ed25519PrivateKey) -> str:
    return encode_hex(key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw))


def gen_key(args: Mapping[str, Any]) -> list[str]:
    key = Ed25519PrivateKey.generate()
    secret = key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    return [encode_hex(secret), _public_hex(key)]


def public_key(args: Mapping[str, Any]) -> list[str]:
    return [_public_hex(_secret_key(args["input"]))]


def sign(args: Mapping[str, Any]) -> list[str]:
    key = _secret_key(args["sk"])
    return [encode_hex(key.sign(decode_hex(args["input"], "message")))]


def verify(args: Mapping[str, Any]) -> list[str]:
    key = _public_key(args["pk"])
    signature = decode_hex(args["sig"], "signature")
    if len(signature) != SIG_LEN:
        raise InvalidArgumentError(
            f"Invalid signature length: {len(signature)} bytes (expected {SIG_LEN})"
        )
    try:
        key.verify(signature, decode_hex(args["input"], "message"))
    except InvalidSignature:
        return ["false"]
    return ["true"]


# RFC 8032 section 7.1, tests 1 and 2
SK1 = "0x9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
PK1 = "0xd75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
SIG1 = (
    "0xe5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
    "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)
SK2 = "0x4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"
PK2 = "0x3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c"
SIG2 = (
    "0x92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da"
    "085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00"
)


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema("ed_gk", "EdDSA generate key pair"),
            func=gen_key,
            cases=[
                Case(
                    desc="Generate a key pair (secret key, public key)",
                    input=[],
                    output=[SK1, PK1],
                    since="0.2.0",
                    is_test=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ed_pk",
                "EdDSA calculate public key",
                args=(Arg.input("Secret key (hex)"),),
            ),
            func=public_key,
            cases=[
                Case(
                    desc="Calculate public key",
                    input=[SK1],
                    output=[PK1],
                    since="0.2.0",
                ),
                Case(
                    desc="Calculate public key",
                    input=[SK2],
                    output=[PK2],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ed_sign",
                "EdDSA sign",
                args=(
                    Arg("sk", "Secret key (hex)", short="s", long="sk", required=True),
                    Arg.input("Message (hex)"),
                ),
            ),
            func=sign,
            cases=[
                Case(
                    desc="Sign a message",
                    input=["-s", SK2, "0x72"],
                    output=[SIG2],
                    since="0.2.0",
                ),
                Case(
                    desc="Sign an empty message",
                    input=["-s", SK1, "0x"],
                    output=[SIG1],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ed_verify",
                "EdDSA verify",
                args=(
                    Arg("pk", "Public key (hex)", short="p", long="pk", required=True),
                    Arg("sig", "Signature (hex)", short="S", long="sig", required=True),
                    Arg.input("Message (hex)"),
                ),
            ),
            func=verify,
            cases=[
                Case(
                    desc="Verify a signature",
                    input=["-p", PK2, "-S", SIG2, "0x72"],
                    output=["true"],
                    since="0.2.0",
                ),
                Case(
                    desc="Verify a signature over another message",
                    input=["-p", PK2, "-S", SIG2, "0x73"],
                    output=["false"],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
    ]


MODULE = Module("eddsa", "EdDSA (Ed25519)", commands)
