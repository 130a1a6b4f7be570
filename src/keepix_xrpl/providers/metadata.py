"""Token issuer name lookup.

Issued currencies on the XRP Ledger carry no name, only a currency code and
an issuer account. A display name is looked up from public account
directories, in order:

1. Bithomp username (needs an API token)
2. XRPScan account name
3. XRPScan account username
4. Currency code itself

API Docs:
    https://docs.bithomp.com/
    https://docs.xrpscan.com/api-documentation/account
"""

import logging
from typing import Optional

import httpx

from keepix_xrpl.config import get_settings

logger = logging.getLogger(__name__)


class TokenNameResolver:
    """Resolve display names of token issuers through HTTP directories."""

    def __init__(
        self,
        bithomp_url: Optional[str] = None,
        bithomp_api_key: Optional[str] = None,
        xrpscan_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize resolver.

        Args:
            bithomp_url: Bithomp base URL (settings default if None)
            bithomp_api_key: Bithomp token, Bithomp is skipped without one
            xrpscan_url: XRPScan base URL (settings default if None)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        settings = get_settings()
        self.bithomp_url = (bithomp_url or settings.bithomp_api_url).rstrip("/")
        self.bithomp_api_key = bithomp_api_key or settings.bithomp_api_key
        self.xrpscan_url = (xrpscan_url or settings.xrpscan_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.metadata_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def get_bithomp_username(self, issuer: str) -> Optional[str]:
        """Get the Bithomp username registered for an account."""
        if not self.bithomp_api_key:
            return None

        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.bithomp_url}/api/v2/address/{issuer}",
                    params={"username": "true"},
                    headers={
                        "Accept": "application/json",
                        "x-bithomp-token": self.bithomp_api_key,
                    },
                )

                if response.status_code != 200:
                    logger.warning(f"Bithomp API error: {response.status_code}")
                    return None

                return response.json().get("username") or None

        except Exception as e:
            logger.error(f"Bithomp lookup failed for {issuer}: {e}")
            return None

    async def get_xrpscan_account_name(self, issuer: str) -> Optional[dict]:
        """Get the XRPScan accountName record of an account."""
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.xrpscan_url}/api/v1/account/{issuer}",
                    headers={"Accept": "application/json"},
                )

                if response.status_code != 200:
                    logger.warning(f"XRPScan API error: {response.status_code}")
                    return None

                return response.json().get("accountName") or None

        except Exception as e:
            logger.error(f"XRPScan lookup failed for {issuer}: {e}")
            return None

    async def resolve(self, code: str, issuer: str) -> str:
        """Get the display name of a token, falling back to its code."""
        username = await self.get_bithomp_username(issuer)
        if username:
            return username

        account_name = await self.get_xrpscan_account_name(issuer)
        if account_name:
            name = account_name.get("name") or account_name.get("username")
            if name:
                return name

        return code
