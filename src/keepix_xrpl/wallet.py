"""XRPL wallet following the Keepix wallet library interface.

Construction derives the wallet identity (see hdwallet.ripple) and selects an
RPC endpoint (see rpc). Ledger operations never raise: failures are logged,
reported to the optional on_error hook and turned into defaults:

    balances        -> "0"
    token info      -> None
    estimate / send -> TransactionResult(success=False, description=...)
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import AsyncIterator, Callable, Optional

from xrpl.models.amounts import IssuedCurrencyAmount
from xrpl.models.transactions import Payment
from xrpl.transaction import sign
from xrpl.utils import xrp_to_drops
from xrpl.wallet import Wallet as XrplWallet

from keepix_xrpl.config import get_settings
from keepix_xrpl.hdwallet.base import WalletIdentity
from keepix_xrpl.hdwallet.ripple import derive_identity, to_signing_key
from keepix_xrpl.providers.base import (
    XRP_CURRENCY,
    LedgerClient,
    LedgerUnavailable,
)
from keepix_xrpl.providers.metadata import TokenNameResolver
from keepix_xrpl.providers.ripple import XrplLedgerClient
from keepix_xrpl.rpc import EndpointSelector, pick_random, resolve_rpc_url

logger = logging.getLogger(__name__)

SUCCESS_RESULT = "tesSUCCESS"

ErrorHook = Callable[[str, Exception], None]


@dataclass
class TransactionResult:
    """Result of a send or fee estimation.

    description is the transaction hash (send), the fee in drops (estimate),
    the ledger result code, or an error message.
    """
    success: bool
    description: str


@dataclass
class TokenInformation:
    """Display information of an issued currency."""
    name: str
    symbol: str
    decimals: int = 0


def parse_token_id(token_id: str) -> tuple[str, str]:
    """Split "<CODE>.<ISSUER>" on the first dot.

    Raises:
        ValueError: If the code or issuer is missing
    """
    code, _, issuer = token_id.partition(".")
    if not code or not issuer:
        raise ValueError(f"Invalid token identifier: {token_id!r}")
    return code, issuer


class Wallet:
    """Single account XRPL wallet.

    Usage:
        wallet = Wallet(type="xrpl", password="secret", rpc={"url": "wss://..."})
        wallet.get_address()
        await wallet.get_coin_balance()
    """

    def __init__(
        self,
        type: str,
        password: Optional[str] = None,
        mnemonic: Optional[str] = None,
        private_key: Optional[str] = None,
        keepix_tokens: Optional[dict] = None,
        rpc: Optional[dict] = None,
        private_key_template: Optional[str] = None,
        client_factory: Optional[Callable[[str], LedgerClient]] = None,
        endpoint_selector: EndpointSelector = pick_random,
        token_resolver: Optional[TokenNameResolver] = None,
        on_error: Optional[ErrorHook] = None,
    ):
        """Build a wallet.

        Args:
            type: Coin type key used in keepix_tokens (e.g. "xrpl")
            password: Derive the wallet from this password (highest priority)
            mnemonic: Derive the wallet from a BIP39 mnemonic
            private_key: Use this private key directly (no mnemonic)
            keepix_tokens: Whitelisted coins and tokens ({"coins", "tokens"})
            rpc: Explicit endpoint, {"url": "wss://..."}
            private_key_template: Constant hashed with the password
            client_factory: Builds a LedgerClient for an endpoint URL
            endpoint_selector: Strategy picking among whitelisted RPCs
            token_resolver: Issuer name lookup for get_token_information
            on_error: Called with (operation, exception) on swallowed failures

        Raises:
            DerivationError: Malformed mnemonic or private key
            EntropyUnavailable: No randomness for a random wallet
        """
        self.type = type
        self.keepix_tokens = keepix_tokens
        template = private_key_template
        if template is None:
            template = get_settings().private_key_template

        self._identity: WalletIdentity = derive_identity(
            password=password,
            mnemonic=mnemonic,
            private_key=private_key,
            private_key_template=template,
        )
        # Signing needs the "00" prefixed form; the identity keeps the key verbatim
        self._keypair = XrplWallet(
            self._identity.public_key, to_signing_key(self._identity.private_key)
        )

        self.rpc_url = resolve_rpc_url(type, rpc, keepix_tokens, endpoint_selector)
        self._client_factory = client_factory or XrplLedgerClient
        self._token_resolver = token_resolver
        self._on_error = on_error

    # PUBLIC

    def get_private_key(self) -> str:
        return self._identity.private_key

    def get_public_key(self) -> str:
        return self._identity.public_key

    def get_mnemonic(self) -> Optional[str]:
        """Get the recovery phrase, None for private key wallets."""
        return self._identity.mnemonic

    def get_address(self) -> str:
        return self._identity.address

    def get_identity(self) -> WalletIdentity:
        return self._identity

    def get_rpc_url(self) -> Optional[str]:
        return self.rpc_url

    def get_provider(self) -> LedgerClient:
        """Create an unconnected ledger client for the wallet endpoint.

        Raises:
            LedgerUnavailable: If no endpoint is configured
        """
        if not self.rpc_url:
            raise LedgerUnavailable(f"No RPC endpoint configured for {self.type}")
        return self._client_factory(self.rpc_url)

    async def get_connected_wallet(self) -> XrplWallet:
        """Get the xrpl-py keypair used for signing."""
        return self._keypair

    # always display the balance in XRP units like 1.01 XRP
    async def get_coin_balance(self, address: Optional[str] = None) -> str:
        """Get the XRP balance of an account (this wallet by default)."""
        try:
            async with self._session() as client:
                balances = await client.get_balances(self._account(address))
            for balance in balances:
                if balance.currency == XRP_CURRENCY and balance.issuer is None:
                    return balance.value
            return "0"
        except Exception as e:
            self._report("get_coin_balance", e)
            return "0"

    async def get_token_information(self, token_id: str) -> Optional[TokenInformation]:
        """Get name, symbol and decimals of an issued currency.

        Issued currencies have no decimals on the ledger, so 0 is reported.
        """
        try:
            code, issuer = parse_token_id(token_id)
            resolver = self._token_resolver or TokenNameResolver()
            name = await resolver.resolve(code, issuer)
            return TokenInformation(name=name, symbol=code, decimals=0)
        except Exception as e:
            self._report("get_token_information", e)
            return None

    async def get_token_balance(self, token_id: str, address: Optional[str] = None) -> str:
        """Get the trust line balance of an issued currency."""
        try:
            code, issuer = parse_token_id(token_id)
            async with self._session() as client:
                balances = await client.get_balances(self._account(address))
            for balance in balances:
                if balance.currency == code and balance.issuer == issuer:
                    return balance.value
            return "0"
        except Exception as e:
            self._report("get_token_balance", e)
            return "0"

    async def estimate_cost_send_coin_to(
        self, receiver_address: str, amount: str
    ) -> TransactionResult:
        """Estimate the fee (in drops) of an XRP payment."""
        try:
            payment = self._coin_payment(receiver_address, amount)
            return await self._estimate(payment)
        except Exception as e:
            self._report("estimate_cost_send_coin_to", e)
            return TransactionResult(False, f"Estimation Failed: {e}")

    async def estimate_cost_send_token_to(
        self, token_id: str, receiver_address: str, amount: str
    ) -> TransactionResult:
        """Estimate the fee (in drops) of an issued currency payment."""
        try:
            payment = self._token_payment(token_id, receiver_address, amount)
            return await self._estimate(payment)
        except Exception as e:
            self._report("estimate_cost_send_token_to", e)
            return TransactionResult(False, f"Estimation Failed: {e}")

    async def send_coin_to(self, receiver_address: str, amount: str) -> TransactionResult:
        """Send XRP. amount is in XRP (e.g. "1.5")."""
        try:
            payment = self._coin_payment(receiver_address, amount)
            return await self._submit(payment)
        except Exception as e:
            self._report("send_coin_to", e)
            return TransactionResult(False, f"Transaction Failed: {e}")

    async def send_token_to(
        self, token_id: str, receiver_address: str, amount: str
    ) -> TransactionResult:
        """Send an issued currency identified by "<CODE>.<ISSUER>"."""
        try:
            payment = self._token_payment(token_id, receiver_address, amount)
            return await self._submit(payment)
        except Exception as e:
            self._report("send_token_to", e)
            return TransactionResult(False, f"Transaction Failed: {e}")

    # PRIVATE

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[LedgerClient]:
        """Connected client, disconnected on every exit path."""
        client = self.get_provider()
        try:
            await client.connect()
            yield client
        finally:
            await client.disconnect()

    def _account(self, address: Optional[str]) -> str:
        return address if address is not None else self.get_address()

    def _report(self, operation: str, error: Exception) -> None:
        logger.error(f"XRPL {operation} failed for {self.get_address()}: {error}")
        if self._on_error is None:
            return
        try:
            self._on_error(operation, error)
        except Exception as hook_error:
            logger.warning(f"on_error hook raised for {operation}: {hook_error}")

    def _coin_payment(self, receiver_address: str, amount: str) -> Payment:
        return Payment(
            account=self.get_address(),
            amount=xrp_to_drops(Decimal(amount)),
            destination=receiver_address,
        )

    def _token_payment(self, token_id: str, receiver_address: str, amount: str) -> Payment:
        code, issuer = parse_token_id(token_id)
        return Payment(
            account=self.get_address(),
            amount=IssuedCurrencyAmount(currency=code, issuer=issuer, value=amount),
            destination=receiver_address,
        )

    async def _estimate(self, payment: Payment) -> TransactionResult:
        async with self._session() as client:
            prepared = await client.autofill(payment)
        return TransactionResult(True, prepared.fee or "0")

    async def _submit(self, payment: Payment) -> TransactionResult:
        async with self._session() as client:
            prepared = await client.autofill(payment)
            signed = sign(prepared, self._keypair)
            result = await client.submit_and_wait(signed)

        tx_result = (result.get("meta") or {}).get("TransactionResult")
        if tx_result == SUCCESS_RESULT:
            logger.info(f"XRPL payment {result.get('hash')} validated")
            return TransactionResult(True, result.get("hash", ""))

        logger.warning(f"XRPL payment failed with {tx_result}")
        return TransactionResult(False, str(tx_result))
