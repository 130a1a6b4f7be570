"""Ledger client and token metadata providers."""

from keepix_xrpl.providers.base import AccountBalance, LedgerClient, LedgerUnavailable
from keepix_xrpl.providers.metadata import TokenNameResolver
from keepix_xrpl.providers.ripple import XrplLedgerClient

__all__ = [
    "AccountBalance",
    "LedgerClient",
    "LedgerUnavailable",
    "TokenNameResolver",
    "XrplLedgerClient",
]
