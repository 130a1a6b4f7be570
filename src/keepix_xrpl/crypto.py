"""Hex and hash helpers used by wallet derivation."""

import hashlib
from typing import Iterable, Union

# 32 bytes of entropy -> 24 word mnemonic
ENTROPY_HEX_LENGTH = 64


def sha256_hex(data: Union[str, bytes]) -> str:
    """Return the lower-case SHA-256 hex digest of data.

    Strings are encoded as UTF-8 before hashing.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def bytes_to_hex(data: Iterable[int]) -> str:
    """Encode a byte sequence as upper-case hex, two digits per byte.

    Example:
        bytes_to_hex([0, 255, 16]) -> "00FF10"
    """
    return "".join(f"{byte:02X}" for byte in data)


def create_entropy(template: str, password: str) -> str:
    """Derive 32 bytes of mnemonic entropy (as hex) from a password.

    Args:
        template: Private key template constant, hashed as a prefix
        password: User password

    Returns:
        64 lower-case hex characters
    """
    return sha256_hex(template + password)[:ENTROPY_HEX_LENGTH]
