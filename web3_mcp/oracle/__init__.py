"""Pyth Hermes oracle client and the static symbol-to-feed mapping."""

from .client import (
    HermesClient,
    OracleError,
    OracleUnavailableError,
    PriceUpdate,
    default_client,
    normalize_price,
    to_iso_timestamp,
)
from .feeds import (
    CHAIN_NATIVE_SYMBOLS,
    COMMON_CRYPTO_SYMBOLS,
    SYMBOL_TO_FEED,
    OracleFeed,
    get_feed_for_symbol,
    get_native_token_feed,
    normalize_feed_id,
    partition_symbols,
    search_local_feeds,
    symbol_for_feed_id,
)

__all__ = [
    "HermesClient",
    "OracleError",
    "OracleUnavailableError",
    "PriceUpdate",
    "default_client",
    "normalize_price",
    "to_iso_timestamp",
    "CHAIN_NATIVE_SYMBOLS",
    "COMMON_CRYPTO_SYMBOLS",
    "SYMBOL_TO_FEED",
    "OracleFeed",
    "get_feed_for_symbol",
    "get_native_token_feed",
    "normalize_feed_id",
    "partition_symbols",
    "search_local_feeds",
    "symbol_for_feed_id",
]
