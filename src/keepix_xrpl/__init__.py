"""Deterministic XRP Ledger wallet for the Keepix wallet aggregator."""

from keepix_xrpl.hdwallet import (
    DerivationError,
    DerivationPath,
    EntropyUnavailable,
    WalletError,
    WalletIdentity,
)
from keepix_xrpl.wallet import TokenInformation, TransactionResult, Wallet

__all__ = [
    "DerivationError",
    "DerivationPath",
    "EntropyUnavailable",
    "TokenInformation",
    "TransactionResult",
    "Wallet",
    "WalletError",
    "WalletIdentity",
]
