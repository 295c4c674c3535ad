"""ECDSA over secp256k1, NIST P-256 and NIST P-384.

Secret keys are raw big-endian scalars, public keys are SEC1 points
(compressed with ``-C``), and signatures are the fixed-width ``r || s``
concatenation. Messages are hashed with SHA-256, or SHA-384 on P-384.
Signing is deterministic (RFC 6979).
"""

from collections.abc import Mapping
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import decode_hex, encode_hex

CURVES: dict[str, tuple[ec.EllipticCurve, hashes.HashAlgorithm]] = {
    "secp256k1": (ec.SECP256K1(), hashes.SHA256()),
    "p256": (ec.SECP256R1(), hashes.SHA256()),
    "p384": (ec.SECP384R1(), hashes.SHA384()),
}

CURVE_ARG = Arg(
    "curve", "Curve", short="c", long="curve", choices=tuple(CURVES), default="secp256k1"
)
COMPRESS_ARG = Arg(
    "compress", "Output the compressed public key", short="C", long="compress", flag=True
)


def _curve(args: Mapping[str, Any]) -> tuple[ec.EllipticCurve, hashes.HashAlgorithm]:
    return CURVES[args.get("curve") or "secp256k1"]


def _width(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


def _secret_key(curve: ec.EllipticCurve, text: str) -> ec.EllipticCurvePrivateKey:
    raw = decode_hex(text, "secret key")
    if len(raw) != _width(curve):
        raise InvalidArgumentError(
            f"Invalid secret key length: {len(raw)} bytes (expected {_width(curve)})"
        )
    try:
        return ec.derive_private_key(int.from_bytes(raw, "big"), curve)
    except ValueError as e:
        raise InvalidArgumentError("Invalid secret key: out of range") from e


def _public_key(curve: ec.EllipticCurve, text: str) -> ec.EllipticCurvePublicKey:
    raw = decode_hex(text, "public key")
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(curve, raw)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid public key: {e}") from e


def _encode_public(key: ec.EllipticCurvePublicKey, compress: bool) -> str:
    fmt = PublicFormat.CompressedPoint if compress else PublicFormat.UncompressedPoint
    return encode_hex(key.public_bytes(Encoding.X962, fmt))


def _encode_secret(curve: ec.EllipticCurve, key: ec.EllipticCurvePrivateKey) -> str:
    scalar = key.private_numbers().private_value
    return encode_hex(scalar.to_bytes(_width(curve), "big"))


def gen_key(args: Mapping[str, Any]) -> list[str]:
    curve, _ = _curve(args)
    key = ec.generate_private_key(curve)
    return [
        _encode_secret(curve, key),
        _encode_public(key.public_key(), bool(args.get("compress"))),
    ]


def public_key(args: Mapping[str, Any]) -> list[str]:
    curve, _ = _curve(args)
    key = _secret_key(curve, args["input"])
    return [_encode_public(key.public_key(), bool(args.get("compress")))]


def sign(args: Mapping[str, Any]) -> list[str]:
    curve, digest = _curve(args)
    key = _secret_key(curve, args["sk"])
    message = decode_hex(args["input"], "message")

    # RFC 6979 nonces, so equal inputs give equal signatures
    signature = key.sign(message, ec.ECDSA(digest, deterministic_signing=True))
    r, s = decode_dss_signature(signature)
    width = _width(curve)
    return [encode_hex(r.to_bytes(width, "big") + s.to_bytes(width, "big"))]


def verify(args: Mapping[str, Any]) -> list[str]:
    curve, digest = _curve(args)
    key = _public_key(curve, args["pk"])
    message = decode_hex(args["input"], "message")

    raw = decode_hex(args["sig"], "signature")
    width = _width(curve)
    if len(raw) != 2 * width:
        raise InvalidArgumentError(
            f"Invalid signature length: {len(raw)} bytes (expected {2 * width})"
        )
    signature = encode_dss_signature(
        int.from_bytes(raw[:width], "big"), int.from_bytes(raw[width:], "big")
    )

    try:
        key.verify(signature, message, ec.ECDSA(digest))
    except InvalidSignature:
        return ["false"]
    return ["true"]


K1_SK = "0x0000000000000000000000000000000000000000000000000000000000000001"
K1_PK = (
    "0x0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
)
K1_PK_COMPRESSED = "0x0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"

# RFC 6979 A.2.5, message "sample"
P256_SK = "0xc9afa9d845ba75166b5c215767b1d6934e50c3db36e89b127b8a622b120f6721"
P256_PK = (
    "0x0460fed4ba255a9d31c961eb74c6356d68c049b8923b61fa6ce669622e60f29fb6"
    "7903fe1008b8bc99a41ae9e95628bc64f2f1b20c2d7e9f5177a3c294d4462299"
)
P256_SIG = (
    "0xefd48b2aacb6a8fd1140dd9cd45e81d69d2c877b56aaf991c34d0ea84eaf3716"
    "f7cb1c942d657c41d436c7a1b6e29f65f3e900dbb9aff4064dc4ab2f843acda8"
)
SAMPLE = "0x73616d706c65"


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "ec_gk", "EC generate key pair", args=(CURVE_ARG, COMPRESS_ARG)
            ),
            func=gen_key,
            cases=[
                Case(
                    desc="Generate a key pair (secret key, public key)",
                    input=["-c", "secp256k1", "-C"],
                    output=[K1_SK, K1_PK_COMPRESSED],
                    since="0.2.0",
                    is_test=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ec_pk",
                "EC calculate public key",
                args=(CURVE_ARG, COMPRESS_ARG, Arg.input("Secret key (hex)")),
            ),
            func=public_key,
            cases=[
                Case(
                    desc="Calculate public key",
                    input=["-c", "secp256k1", K1_SK],
                    output=[K1_PK],
                    since="0.2.0",
                ),
                Case(
                    desc="Calculate compressed public key",
                    input=["-c", "secp256k1", "-C", K1_SK],
                    output=[K1_PK_COMPRESSED],
                    since="0.2.0",
                ),
                Case(
                    desc="Calculate public key (p256)",
                    input=["-c", "p256", P256_SK],
                    output=[P256_PK],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ec_sign",
                "EC sign",
                args=(
                    CURVE_ARG,
                    Arg("sk", "Secret key (hex)", short="s", long="sk", required=True),
                    Arg.input("Message (hex)"),
                ),
            ),
            func=sign,
            cases=[
                Case(
                    desc="Sign a message (r || s)",
                    input=["-c", "p256", "-s", P256_SK, SAMPLE],
                    output=[P256_SIG],
                    since="0.2.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "ec_verify",
                "EC verify",
                args=(
                    CURVE_ARG,
                    Arg("pk", "Public key (hex)", short="p", long="pk", required=True),
                    Arg("sig", "Signature (hex)", short="S", long="sig", required=True),
                    Arg.input("Message (hex)"),
                ),
            ),
            func=verify,
            cases=[
                Case(
                    desc="Verify a signature",
                    input=["-c", "p256", "-p", P256_PK, "-S", P256_SIG, SAMPLE],
                    output=["true"],
                    since="0.2.0",
                ),
                Case(
                    desc="Verify a signature over another message",
                    input=["-c", "p256", "-p", P256_PK, "-S", P256_SIG, "0x73616d706c66"],
                    output=["false"],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
    ]


MODULE = Module("ecdsa", "ECDSA (secp256k1, P-256, P-384)", commands)
