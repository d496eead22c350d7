"""
Symbol-based pricing tools.

Symbols with a direct oracle feed are priced in one batched oracle call. The
rest are never guessed: they come back as a two-step plan (keyword search for
the contract, then price by contract) for the caller to execute.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from web3_mcp.config import Web3McpConfig, default_config
from web3_mcp.metrics import default_metrics
from web3_mcp.operations.dispatcher import dispatch
from web3_mcp.operations.evm import (
    EVM_PROTOCOLS,
    GET_TOKEN_PRICES_BY_CONTRACTS,
    SEARCH_TOKEN_BY_KEYWORD,
)
from web3_mcp.oracle import default_client, get_native_token_feed, partition_symbols
from web3_mcp.oracle.feeds import OracleFeed, normalize_feed_id
from web3_mcp.result import NeedsFallback, Outcome, Resolved
from web3_mcp.tools.oracle import get_latest_prices
from web3_mcp.tools.symbols import SCORING_RUBRIC
from web3_mcp.tools.validators import normalize_chain, parse_string_list

logger = logging.getLogger(__name__)

ORACLE_CURRENCY = "USD"
SEARCH_CANDIDATES_PER_SYMBOL = 5


def _oracle_quote(feed: OracleFeed, price: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "symbol": feed.symbol,
        "description": feed.description,
        "source": "oracle",
        "price": price.get("price") if price else None,
        "currency": ORACLE_CURRENCY,
        "publishTime": price.get("publishTime") if price else None,
        "feedId": feed.feed_id,
    }


def _unresolved_quote(symbol: str, currency: str) -> Dict[str, Any]:
    return {
        "symbol": symbol,
        "source": "unresolved",
        "price": None,
        "currency": currency,
        "publishTime": None,
        "feedId": None,
    }


async def _price_covered(feeds: List[OracleFeed], *, client) -> Outcome[Dict[str, Dict[str, Any]]]:
    """
    One batched oracle call for every covered feed.

    Prices are keyed by normalized feed id rather than by position so a
    reordered or shortened response cannot misattribute a price.
    """
    unique_ids: List[str] = []
    for feed in feeds:
        if feed.feed_id not in unique_ids:
            unique_ids.append(feed.feed_id)

    result = await get_latest_prices(unique_ids, client=client)
    if not result["success"]:
        return NeedsFallback(reason=result.get("error") or "Oracle unavailable")

    by_id: Dict[str, Dict[str, Any]] = {}
    for price in result["prices"]:
        if isinstance(price, dict) and isinstance(price.get("id"), str):
            by_id[normalize_feed_id(price["id"])] = price
    return Resolved(value=by_id, source="oracle")


def build_resolution_plan(symbols: List[str], *, chain: str, currency: str) -> Dict[str, Any]:
    """Two dispatch-ready steps per symbol: keyword search, then price by contract."""
    steps = []
    for symbol in symbols:
        search_body = {"keyword": symbol, "page": 1, "rpp": SEARCH_CANDIDATES_PER_SYMBOL}
        price_body = {"contractAddresses": [], "currency": currency}
        steps.append(
            {
                "symbol": symbol,
                "steps": [
                    {
                        "step": 1,
                        "action": "Find contract address for symbol",
                        "tool": "cached_nodit_api",
                        "dispatch": dispatch("evm", SEARCH_TOKEN_BY_KEYWORD, chain, "mainnet", search_body),
                        "select_with": {"tool": "select_token_match", "scoring_rubric": SCORING_RUBRIC},
                    },
                    {
                        "step": 2,
                        "action": "Get price once the contract address is resolved",
                        "tool": "cached_nodit_api",
                        "dispatch": dispatch("evm", GET_TOKEN_PRICES_BY_CONTRACTS, chain, "mainnet", price_body),
                        "fill_in": {"contractAddresses": "contract_address selected in step 1"},
                    },
                ],
            }
        )
    return {"chain": chain, "currency": currency, "symbols": list(symbols), "per_symbol": steps}


async def resolve_prices(
    symbols: Optional[List[str]] = None,
    currency: Optional[str] = None,
    chain: Optional[str] = None,
    *,
    client=default_client,
    config: Web3McpConfig = default_config,
) -> Dict[str, Any]:
    """
    Price a list of token symbols.

    The oracle/unresolved partition is computed before any network access and is
    case-insensitive. When the oracle batch fails, every symbol it would have
    covered is moved to the manual-resolution plan and the error is reported
    alongside it; the request itself still succeeds.
    """
    requested = parse_string_list(symbols, max_items=config.max_symbols)
    if requested is None:
        return {"status": "error", "error": f"symbols must be 1 to {config.max_symbols} token symbols."}
    if currency is not None and (not isinstance(currency, str) or not currency.strip()):
        return {"status": "error", "error": "Invalid currency."}
    effective_currency = (currency or config.default_currency).strip().upper()
    effective_chain = normalize_chain(chain) or config.default_pricing_chain
    if effective_chain not in EVM_PROTOCOLS:
        return {
            "status": "error",
            "error": "Unsupported chain.",
            "error_type": "UnsupportedProtocol",
            "supported_chains": list(EVM_PROTOCOLS),
        }

    covered, _ = partition_symbols(requested)
    normalized = [symbol.strip().upper() for symbol in requested]

    oracle_error: Optional[str] = None
    prices_by_id: Dict[str, Dict[str, Any]] = {}
    if covered:
        outcome = await _price_covered(covered, client=client)
        if outcome.needs_fallback:
            oracle_error = outcome.reason
            logger.warning(
                "oracle batch failed for %d symbols; falling back to manual resolution: %s",
                len(covered),
                oracle_error,
            )
        else:
            prices_by_id = outcome.value

    oracle_available = bool(covered) and oracle_error is None
    quotes: List[Dict[str, Any]] = []
    unresolved: List[str] = []
    for symbol in normalized:
        feed = next((item for item in covered if item.symbol == symbol), None)
        if feed is not None and oracle_available:
            quotes.append(_oracle_quote(feed, prices_by_id.get(normalize_feed_id(feed.feed_id))))
        else:
            quotes.append(_unresolved_quote(symbol, effective_currency))
            unresolved.append(symbol)

    oracle_covered = len(normalized) - len(unresolved)
    default_metrics.record_fallback_symbols(len(unresolved))

    return {
        "status": "success",
        "task": "symbol_based_pricing",
        "currency": effective_currency,
        "chain": effective_chain,
        "total_symbols": len(normalized),
        "oracle_covered": oracle_covered,
        "unresolved_count": len(unresolved),
        "coverage_ratio": oracle_covered / len(normalized),
        "quotes": quotes,
        "unresolved_symbols": unresolved,
        "oracle_error": oracle_error,
        "pending_plan": build_resolution_plan(unresolved, chain=effective_chain, currency=effective_currency),
    }


async def get_native_token_price(
    chain: Optional[str] = None,
    *,
    client=default_client,
) -> Dict[str, Any]:
    """Oracle price of a chain's native token (ETH, MATIC, AVAX)."""
    normalized_chain = normalize_chain(chain)
    if normalized_chain is None:
        return {"status": "error", "error": "chain is required."}

    feed = get_native_token_feed(normalized_chain)
    if feed is None:
        return {
            "status": "error",
            "error": f"No oracle feed available for {normalized_chain} native token",
            "chain": normalized_chain,
            "suggestion": "Use symbol_converter to find the native token contract address, then use cached_nodit_api",
        }

    result = await get_latest_prices([feed.feed_id], client=client)
    if not result["success"] or not result["prices"]:
        return {
            "status": "error",
            "error": result.get("error") or "No price data available",
            "chain": normalized_chain,
            "symbol": feed.symbol,
            "feed_id": feed.feed_id,
        }

    price = result["prices"][0]
    return {
        "status": "success",
        "chain": normalized_chain,
        "native_token": {
            "symbol": feed.symbol,
            "description": feed.description,
            "price": price.get("price"),
            "currency": ORACLE_CURRENCY,
            "last_updated": price.get("publishTime"),
            "feed_id": feed.feed_id,
            "source": "oracle",
        },
    }
