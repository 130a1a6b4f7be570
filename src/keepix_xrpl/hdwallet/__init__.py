"""HD wallet module for deterministic XRPL key derivation."""

from keepix_xrpl.hdwallet.base import (
    DerivationError,
    DerivationPath,
    EntropyUnavailable,
    WalletError,
    WalletIdentity,
)
from keepix_xrpl.hdwallet.ripple import derive_identity

__all__ = [
    "DerivationError",
    "DerivationPath",
    "EntropyUnavailable",
    "WalletError",
    "WalletIdentity",
    "derive_identity",
]
