"""RPC endpoint selection.

Priority:
1. Explicit rpc={"url": ...} passed to the wallet
2. One entry of keepix_tokens["coins"][type]["rpcs"], picked by a selector
3. XRPL_RPC_URL setting
4. None (ledger operations return defaults)
"""

import itertools
import random
from typing import Any, Callable, Optional, Sequence

from keepix_xrpl.config import get_settings

EndpointSelector = Callable[[Sequence[str]], str]


def pick_random(endpoints: Sequence[str]) -> str:
    """Pick one endpoint uniformly at random."""
    return random.choice(endpoints)


def pick_round_robin() -> EndpointSelector:
    """Build a selector cycling through endpoints in order.

    The position is shared by every call of the returned selector.
    """
    counter = itertools.count()

    def select(endpoints: Sequence[str]) -> str:
        return endpoints[next(counter) % len(endpoints)]

    return select


def _endpoint_url(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, dict):
        return entry.get("url") or None
    return None


def get_whitelisted_rpcs(keepix_tokens: Optional[dict], coin_type: str) -> list[str]:
    """Get RPC URLs whitelisted for a coin type."""
    if not keepix_tokens:
        return []

    coin = (keepix_tokens.get("coins") or {}).get(coin_type) or {}
    urls = [_endpoint_url(entry) for entry in coin.get("rpcs") or []]
    return [url for url in urls if url]


def resolve_rpc_url(
    coin_type: str,
    rpc: Optional[dict] = None,
    keepix_tokens: Optional[dict] = None,
    selector: EndpointSelector = pick_random,
) -> Optional[str]:
    """Select the RPC endpoint of a wallet.

    Args:
        coin_type: Wallet type key in keepix_tokens["coins"] (e.g. "xrpl")
        rpc: Explicit endpoint mapping with a "url" key
        keepix_tokens: Whitelisted coins and tokens
        selector: Strategy choosing among whitelisted endpoints

    Returns:
        Endpoint URL, or None when nothing is configured
    """
    explicit = _endpoint_url(rpc)
    if explicit:
        return explicit

    whitelisted = get_whitelisted_rpcs(keepix_tokens, coin_type)
    if whitelisted:
        return selector(whitelisted)

    return get_settings().xrpl_rpc_url or None
