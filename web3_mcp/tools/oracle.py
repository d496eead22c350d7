"""Pyth oracle tools: batched price lookups and feed discovery."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from web3_mcp.config import Web3McpConfig, default_config
from web3_mcp.metrics import default_metrics
from web3_mcp.oracle import (
    COMMON_CRYPTO_SYMBOLS,
    SYMBOL_TO_FEED,
    OracleError,
    OracleUnavailableError,
    default_client,
    search_local_feeds,
    symbol_for_feed_id,
)
from web3_mcp.tools.validators import clamp_limit, is_valid_feed_id, parse_string_list

logger = logging.getLogger(__name__)

ASSET_TYPES = {"crypto", "equity", "fx", "metal", "rates", "crypto_redemption_rate", "commodities"}


async def get_latest_prices(feed_ids: List[str], *, client=default_client) -> Dict[str, Any]:
    """
    Batched price lookup at the oracle boundary.

    Returns ``{"success": True, "prices": [...]}`` with one entry per requested
    id in request order, or ``{"success": False, "error": ...}``.
    """
    if not feed_ids or not all(isinstance(feed_id, str) and feed_id.strip() for feed_id in feed_ids):
        return {"success": False, "error": "feed_ids must be a non-empty list of feed id strings"}

    try:
        updates = await client.get_latest_prices(feed_ids)
    except OracleUnavailableError:
        default_metrics.record_oracle_batch(success=False)
        return {"success": False, "error": "Oracle unreachable"}
    except OracleError as exc:
        default_metrics.record_oracle_batch(success=False)
        return {"success": False, "error": str(exc) or "Oracle error."}
    except Exception:
        logger.exception("Unexpected error fetching oracle prices")
        default_metrics.record_oracle_batch(success=False)
        return {"success": False, "error": "Unexpected error while retrieving oracle prices."}

    default_metrics.record_oracle_batch(success=True)
    return {"success": True, "prices": [update.to_dict() for update in updates]}


async def pyth_get_prices(
    price_ids: Optional[List[str]] = None,
    *,
    client=default_client,
    config: Web3McpConfig = default_config,
) -> Dict[str, Any]:
    """Get the latest price updates for the provided price feed ids."""
    ids = parse_string_list(price_ids, max_items=config.max_feed_ids)
    if ids is None:
        return {"status": "error", "error": f"price_ids must be 1 to {config.max_feed_ids} feed ids."}
    if not all(is_valid_feed_id(feed_id) for feed_id in ids):
        return {"status": "error", "error": "Invalid price feed id."}

    result = await get_latest_prices(ids, client=client)
    if not result["success"]:
        return {"status": "error", "error": result["error"]}
    prices = []
    for price in result["prices"]:
        symbol = symbol_for_feed_id(price["id"])
        prices.append({**price, "symbol": symbol} if symbol else price)
    return {"status": "success", "prices": prices}


async def pyth_get_common_crypto_prices(*, client=default_client) -> Dict[str, Any]:
    """Latest prices for BTC, ETH, SOL and SUI."""
    feeds = [SYMBOL_TO_FEED[symbol] for symbol in COMMON_CRYPTO_SYMBOLS]
    result = await get_latest_prices([feed.feed_id for feed in feeds], client=client)
    if not result["success"]:
        return {"status": "error", "error": result["error"]}
    prices = [
        {**price, "symbol": feed.symbol, "description": feed.description}
        for feed, price in zip(feeds, result["prices"])
    ]
    return {"status": "success", "prices": prices}


def _format_feed(feed: Dict[str, Any]) -> Dict[str, Any]:
    attributes = feed.get("attributes") if isinstance(feed.get("attributes"), dict) else {}
    return {
        "id": feed.get("id"),
        "symbol": attributes.get("display_symbol") or "Unknown",
        "baseCurrency": attributes.get("base") or "Unknown",
        "quoteCurrency": attributes.get("quote_currency") or "Unknown",
        "assetType": attributes.get("asset_type") or "Unknown",
    }


async def search_price_feeds(
    query: Optional[str] = None,
    asset_type: Optional[str] = None,
    *,
    client=default_client,
) -> Dict[str, Any]:
    """Search oracle price feeds by query and optional asset type."""
    if not query or not isinstance(query, str) or not query.strip():
        return {"status": "error", "error": "query is required."}
    normalized_type: Optional[str] = None
    if asset_type:
        normalized_type = asset_type.strip().lower() if isinstance(asset_type, str) else None
        if normalized_type not in ASSET_TYPES:
            return {"status": "error", "error": "Invalid asset type."}

    try:
        raw_feeds = await client.search_feeds(query.strip(), normalized_type)
    except OracleUnavailableError:
        return {"status": "error", "error": "Oracle unreachable"}
    except OracleError:
        return {"status": "error", "error": "Oracle error."}
    except Exception:
        logger.exception("Unexpected error searching price feeds")
        return {"status": "error", "error": "Unexpected error while searching price feeds."}

    feeds = [_format_feed(feed) for feed in raw_feeds]
    return {"status": "success", "priceFeeds": feeds, "count": len(feeds)}


async def search_token_symbols(
    query: Optional[str] = None,
    limit: Optional[int] = None,
    *,
    client=default_client,
    config: Web3McpConfig = default_config,
) -> Dict[str, Any]:
    """
    Search symbols with an oracle feed: local mapping first, then the oracle's
    crypto feed search for the remaining slots.
    """
    if not query or not isinstance(query, str) or not query.strip():
        return {"status": "error", "error": "query is required."}
    effective_limit = clamp_limit(
        limit, default=config.default_symbol_search, max_value=config.max_symbol_search
    )

    local = search_local_feeds(query)[:effective_limit]
    remote: List[Dict[str, Any]] = []
    remaining = effective_limit - len(local)
    if remaining > 0:
        try:
            raw_feeds = await client.search_feeds(query.strip(), "crypto")
        except OracleError:
            logger.warning("oracle feed search failed for query %s; returning local matches", query)
            raw_feeds = []
        remote = raw_feeds[:remaining]

    local_results = [
        {
            "symbol": feed.symbol,
            "description": feed.description,
            "feed_id": feed.feed_id,
            "source": "local_mapping",
            "supported": True,
        }
        for feed in local
    ]
    remote_results = []
    for feed in remote:
        attributes = feed.get("attributes") if isinstance(feed.get("attributes"), dict) else {}
        remote_results.append(
            {
                "symbol": attributes.get("display_symbol") or "Unknown",
                "description": attributes.get("description") or attributes.get("base") or "Unknown",
                "feed_id": feed.get("id"),
                "source": "pyth_oracle",
                "asset_type": attributes.get("asset_type"),
            }
        )

    return {
        "status": "success",
        "query": query,
        "total_results": len(local_results) + len(remote_results),
        "local_pyth_symbols": local_results,
        "additional_pyth_feeds": remote_results,
        "search_summary": {
            "local_matches": len(local_results),
            "api_matches": len(remote_results),
        },
    }
