"""Ledger client interface.

The wallet talks to the XRP Ledger through this small surface so the
network client can be swapped (or mocked) without touching wallet code.

Session flow for every wallet operation:
1. Client is created for the selected RPC endpoint
2. connect()
3. One request (balances, autofill, submit)
4. disconnect(), on success and on failure
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from xrpl.models.transactions import Transaction

XRP_CURRENCY = "XRP"


class LedgerUnavailable(Exception):
    """Raised when no RPC endpoint is configured for the wallet."""
    pass


@dataclass
class AccountBalance:
    """One balance line of an account."""
    currency: str
    value: str                     # Decimal string in display units
    issuer: Optional[str] = None   # None for XRP

    @property
    def is_native(self) -> bool:
        return self.currency == XRP_CURRENCY and self.issuer is None


class LedgerClient(ABC):
    """Abstract XRPL client used by the wallet facade."""

    def __init__(self, url: str):
        self.url = url

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection to the ledger node."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection. Safe to call when not connected."""
        pass

    @abstractmethod
    async def get_balances(self, address: str) -> list[AccountBalance]:
        """Get XRP and trust line balances of an account.

        Args:
            address: Classic XRPL address

        Returns:
            XRP balance first, then one entry per trust line
        """
        pass

    @abstractmethod
    async def autofill(self, transaction: Transaction) -> Transaction:
        """Fill fee, sequence and last ledger sequence of a transaction."""
        pass

    @abstractmethod
    async def submit_and_wait(self, signed_transaction: Transaction) -> dict[str, Any]:
        """Submit a signed transaction and wait for validation.

        Returns:
            Raw result dict (contains "hash" and "meta")
        """
        pass
