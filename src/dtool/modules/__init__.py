"""Transformation modules shipped with dtool.

Each module exposes a ``MODULE`` built from a ``commands()`` factory. The
registry is built from ``MODULES``, in this order; the order decides the
order of subcommands, usage text and completion scripts.
"""

from dtool.modules import (
    aes,
    base58,
    base64_codec,
    case,
    ecdsa,
    eddsa,
    hashing,
    hexstr,
    html_entity,
    number_codec,
    number_system,
    pbkdf2,
    regex,
    timestamp,
    unicode,
    url,
)

MODULES = (
    hexstr.MODULE,
    timestamp.MODULE,
    number_system.MODULE,
    base58.MODULE,
    base64_codec.MODULE,
    url.MODULE,
    number_codec.MODULE,
    hashing.MODULE,
    unicode.MODULE,
    html_entity.MODULE,
    regex.MODULE,
    pbkdf2.MODULE,
    case.MODULE,
    aes.MODULE,
    ecdsa.MODULE,
    eddsa.MODULE,
)

__all__ = ["MODULES"]
