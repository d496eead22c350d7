"""Minimal sanity checks for the web3 MCP tools against the live oracle."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from web3_mcp.oracle import default_client  # noqa: E402
from web3_mcp.tools import (  # noqa: E402
    cached_aptos_api,
    get_native_token_price,
    pyth_get_common_crypto_prices,
    resolve_prices,
    resolve_symbol,
    search_price_feeds,
)

# Comma-separated symbols to price; override via env.
SAMPLE_SYMBOLS = os.getenv("WEB3_MCP_SAMPLE_SYMBOLS", "BTC,ETH,PEPE")
# Opt-in to the feed search (returns a large payload).
RUN_FEED_SEARCH = os.getenv("RUN_FEED_SEARCH_SANITY", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    print("Symbol USDC on ethereum:", resolve_symbol("USDC", "ethereum"))
    print("Aptos coin_infos:", cached_aptos_api("coin_infos", variables={"coin_types": ["0x1::aptos_coin::AptosCoin"]}))

    print("Common crypto prices:", await pyth_get_common_crypto_prices())
    print("Native price (polygon):", await get_native_token_price("polygon"))

    pricing = await resolve_prices(SAMPLE_SYMBOLS)
    print("Coverage:", pricing.get("coverage_ratio"), "unresolved:", pricing.get("unresolved_symbols"))

    if RUN_FEED_SEARCH:
        print("Feed search (btc, crypto):", await search_price_feeds("btc", "crypto"))

    await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
