"""XRPL websocket client built on xrpl-py.

Uses one AsyncWebsocketClient per session; connections are never pooled.
"""

import logging
import re
from typing import Any, Optional

from xrpl.asyncio.clients import AsyncWebsocketClient, XRPLRequestFailureException
from xrpl.asyncio.transaction import (
    XRPLReliableSubmissionException,
    autofill,
    submit_and_wait,
)
from xrpl.models.requests import AccountInfo, AccountLines
from xrpl.models.transactions import Transaction
from xrpl.utils import drops_to_xrp

from keepix_xrpl.providers.base import XRP_CURRENCY, AccountBalance, LedgerClient

logger = logging.getLogger(__name__)

# tec, tef, tel, tem and ter engine result codes
RESULT_CODE_PATTERN = re.compile(r"\bte[cflmr][A-Z_]+\b")


class XrplLedgerClient(LedgerClient):
    """LedgerClient over an xrpl-py websocket connection."""

    def __init__(self, url: str):
        super().__init__(url)
        self._client = AsyncWebsocketClient(url)

    async def connect(self) -> None:
        await self._client.open()
        logger.debug(f"Connected to {self.url}")

    async def disconnect(self) -> None:
        if self._client.is_open():
            await self._client.close()
            logger.debug(f"Disconnected from {self.url}")

    async def _request(self, request) -> dict[str, Any]:
        response = await self._client.request(request)
        if not response.is_successful():
            raise XRPLRequestFailureException(response.result)
        return response.result

    async def get_balances(self, address: str) -> list[AccountBalance]:
        """Get XRP balance and trust lines of an account.

        XRP is converted from drops, trust line values are returned as the
        ledger reports them.
        """
        info = await self._request(
            AccountInfo(account=address, ledger_index="validated")
        )
        drops = info["account_data"]["Balance"]
        balances = [AccountBalance(currency=XRP_CURRENCY, value=str(drops_to_xrp(drops)))]

        marker: Optional[Any] = None
        while True:
            lines = await self._request(
                AccountLines(account=address, ledger_index="validated", marker=marker)
            )
            for line in lines.get("lines", []):
                balances.append(
                    AccountBalance(
                        currency=line["currency"],
                        value=line["balance"],
                        issuer=line["account"],
                    )
                )
            marker = lines.get("marker")
            if marker is None:
                break

        return balances

    async def autofill(self, transaction: Transaction) -> Transaction:
        return await autofill(transaction, self._client)

    async def submit_and_wait(self, signed_transaction: Transaction) -> dict[str, Any]:
        """Submit a signed transaction and wait for validation.

        xrpl-py raises on rejected transactions ("Transaction failed: tecPATH_DRY",
        "temBAD_AMOUNT: ..."); those are returned as a result carrying the
        ledger code so callers see the code rather than an exception.
        """
        try:
            response = await submit_and_wait(signed_transaction, self._client)
        except XRPLReliableSubmissionException as e:
            match = RESULT_CODE_PATTERN.search(str(e))
            if match is None:
                raise
            logger.debug(f"Transaction rejected by {self.url}: {e}")
            return {
                "meta": {"TransactionResult": match.group(0)},
                "engine_result_message": str(e),
            }
        return response.result
