"""Wallet identity model and derivation errors.

A WalletIdentity is produced once, when a Wallet is built, and never changes
afterwards. Which fields are filled depends on the derivation path:

    PASSWORD / MNEMONIC / RANDOM -> mnemonic is set
    PRIVATE_KEY                  -> mnemonic is None
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DerivationPath(str, Enum):
    """Construction strategy that produced a wallet identity."""
    PASSWORD = "password"
    MNEMONIC = "mnemonic"
    PRIVATE_KEY = "private_key"
    RANDOM = "random"


class WalletError(Exception):
    """Base exception for wallet construction errors."""
    pass


class DerivationError(WalletError):
    """Raised when a mnemonic or private key cannot be turned into a wallet.

    Attributes:
        path: Derivation path that failed
        reason: Human readable cause (bad checksum, bad length, ...)
    """

    def __init__(self, path: DerivationPath, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path.value} derivation failed: {reason}")


class EntropyUnavailable(WalletError):
    """Raised when the OS cannot provide random bytes."""
    pass


@dataclass(frozen=True)
class WalletIdentity:
    """Keys and address of a single XRPL account."""

    address: str
    private_key: str
    public_key: str
    derivation_path: DerivationPath
    mnemonic: Optional[str] = None

    @property
    def has_mnemonic(self) -> bool:
        return self.mnemonic is not None

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return (
            f"WalletIdentity(address={self.address!r}, "
            f"derivation_path={self.derivation_path.value!r})"
        )
