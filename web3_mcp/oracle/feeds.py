"""
Static mapping of token symbols to Pyth price feed ids.

Lets callers price well-known tokens by symbol instead of by feed id. Symbols
are stored uppercase and are globally unique.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class OracleFeed:
    symbol: str
    feed_id: str
    description: str


def _feeds(*rows: Tuple[str, str, str]) -> Mapping[str, OracleFeed]:
    return MappingProxyType({symbol: OracleFeed(symbol, feed_id, description) for symbol, feed_id, description in rows})


SYMBOL_TO_FEED: Mapping[str, OracleFeed] = _feeds(
    # Major cryptocurrencies
    ("BTC", "0xe62df6c8b4a85fe1a67db44dc12de5db330f7ac66b72dc658afedf0f4a415b43", "Bitcoin"),
    ("ETH", "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace", "Ethereum"),
    ("SOL", "0xef0d8b6fda2ceba41da15d4095d1da392a0d2f8ed0c6c7bc0f4cfac8c280b56d", "Solana"),
    ("SUI", "0x23d7315113f5b1d3ba7a83604c44b94d79f4fd69af77f804fc7f920a6dc65744", "Sui"),
    # Stablecoins
    ("USDT", "0x2b89b9dc8fdf9f34709a5b106b472f0f39bb6ca9ce04b0fd7f2e971688e2e53b", "Tether USD"),
    ("USDC", "0xeaa020c61cc479712813461ce153894a96a6c00b21ed0cfc2798d1f9a9e9c94a", "USD Coin"),
    ("DAI", "0xb0948a5e5313200c632b51bb5ca32f6de0d36e9950a942d19751e833f70dabfd", "Dai Stablecoin"),
    # Layer 1 tokens
    ("MATIC", "0x5de33a9112c2b700b8d30b8a3402c103578ccfa2765696471cc672bd5cf6ac52", "Polygon"),
    ("AVAX", "0x93da3352f9f1d105fdfe4971cfa80e9dd777bfc5d0f683ebb6e1294b92137bb7", "Avalanche"),
    ("BNB", "0x2f95862b045670cd22bee3114c39763a4a08beeb663b145d283c31d7d1101c4f", "BNB"),
    ("ADA", "0x2a01deaec9e51a579277b34b122399984d0bbf57e2458a7e42fecd2829867a0d", "Cardano"),
    # DeFi tokens
    ("UNI", "0x78d185a741d07edb3aeb9c639787bd0b1b03000b6eb924e9a0e39e0ba97e5ebe", "Uniswap"),
    ("LINK", "0x8ac0c70fff57e9aefdf5edf44b51d62c2d433653cbb2cf5cc06bb115af04d221", "Chainlink"),
    ("AAVE", "0x2b9ab1e972a281585084148ba1389800799bd4be63b957507db1349314e47445", "Aave"),
    ("CRV", "0xa19d04ac696c7a6616d291c7e5d1377cc8be437c327b75adb5dc1bad745fcae8", "Curve DAO Token"),
    # Other popular tokens
    ("DOGE", "0xdcef50dd0a4cd2dcc17e45df1676dcb336a11a61c69df7a0299b0150c672d25c", "Dogecoin"),
    ("SHIB", "0xf0d57deca57b3da2fe63a493f4c25925fdfd8edf834b20f78a5404b4da80c8da", "Shiba Inu"),
    ("APT", "0x03ae4db29ed4ae33d323568895aa00337e658e348b37509f5372ae51f0af00d5", "Aptos"),
)

CHAIN_NATIVE_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "ethereum": "ETH",
        "polygon": "MATIC",
        "avalanche": "AVAX",
        "arbitrum": "ETH",
        "base": "ETH",
        "optimism": "ETH",
        "kaia": "ETH",
    }
)

COMMON_CRYPTO_SYMBOLS = ("BTC", "ETH", "SOL", "SUI")


def normalize_feed_id(feed_id: str) -> str:
    """Hermes answers with bare lowercase hex; requests may carry a 0x prefix."""
    value = feed_id.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    return value


def get_feed_for_symbol(symbol: str) -> Optional[OracleFeed]:
    if not isinstance(symbol, str):
        return None
    return SYMBOL_TO_FEED.get(symbol.strip().upper())


def get_native_token_feed(chain: str) -> Optional[OracleFeed]:
    symbol = CHAIN_NATIVE_SYMBOLS.get(chain.strip().lower()) if isinstance(chain, str) else None
    if symbol is None:
        return None
    return SYMBOL_TO_FEED.get(symbol)


def partition_symbols(symbols: Sequence[str]) -> Tuple[List[OracleFeed], List[str]]:
    """
    Split symbols into oracle-covered feeds and the rest, preserving input order.

    Matching is case-insensitive. Covered entries are returned as feeds with the
    uppercase symbol; uncovered symbols are returned uppercased as well so that
    ``"btc"`` and ``"BTC"`` behave the same downstream.
    """
    covered: List[OracleFeed] = []
    unresolved: List[str] = []
    for raw in symbols:
        symbol = raw.strip().upper() if isinstance(raw, str) else str(raw)
        feed = get_feed_for_symbol(symbol)
        if feed is not None:
            covered.append(feed)
        else:
            unresolved.append(symbol)
    return covered, unresolved


def search_local_feeds(query: str) -> List[OracleFeed]:
    """Substring match on symbol or description."""
    term = query.strip().lower() if isinstance(query, str) else ""
    if not term:
        return []
    return [
        feed
        for symbol, feed in SYMBOL_TO_FEED.items()
        if term in symbol.lower() or term in feed.description.lower()
    ]


def symbol_for_feed_id(feed_id: str) -> Optional[str]:
    target = normalize_feed_id(feed_id)
    for symbol, feed in SYMBOL_TO_FEED.items():
        if normalize_feed_id(feed.feed_id) == target:
            return symbol
    return None
