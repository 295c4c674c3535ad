"""Shared input/output conversions used by the transformation modules."""

from dtool.exceptions import InvalidArgumentError


def decode_hex(text: str, what: str = "hex") -> bytes:
    """Decode a hex string, with or without a ``0x`` prefix.

    Whitespace is ignored, so ``"0x61 62 63"`` is accepted.

    Args:
        text: Hex string.
        what: Name of the value, used in the error message.

    Returns:
        The decoded bytes (empty for ``"0x"``).

    Raises:
        InvalidArgumentError: If the string is not valid hex.
    """
    s = "".join(text.split())
    if s[:2].lower() == "0x":
        s = s[2:]
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {what}: {text!r}") from e


def encode_hex(data: bytes) -> str:
    """Encode bytes as ``0x``-prefixed lowercase hex."""
    return "0x" + data.hex()


def decode_utf8(data: bytes) -> str:
    """Decode UTF-8 bytes, raising a domain error on malformed input."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"Invalid utf-8: {e}") from e


def encode_utf8(text: str) -> bytes:
    """Encode text as UTF-8.

    Undecodable bytes in argv reach Python as lone surrogates, which have
    no UTF-8 form.
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(f"Invalid utf-8: {text!r}") from e


def parse_int(text: str, what: str = "number") -> int:
    """Parse an integer in decimal or with a ``0b``/``0o``/``0x`` prefix.

    Args:
        text: The number as typed by the user.
        what: Name of the value, used in the error message.

    Returns:
        The parsed integer.

    Raises:
        InvalidArgumentError: If the text is not an integer.
    """
    s = text.strip()
    try:
        return int(s, 0)
    except ValueError:
        pass
    # int(s, 0) rejects leading zeros such as "007"
    try:
        return int(s, 10)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {what}: {text!r}") from e


def parse_positive_int(text: str, what: str = "number") -> int:
    """Parse an integer that must be greater than zero."""
    value = parse_int(text, what)
    if value <= 0:
        raise InvalidArgumentError(f"Invalid {what}: must be positive, got {value}")
    return value
