"""LLM-facing tool implementations."""

from .dispatch import cached_aptos_api, cached_bitcoin_api, cached_nodit_api, dispatch_operation
from .symbols import resolve_symbol, select_best_match
from .pricing import get_native_token_price, resolve_prices
from .oracle import (
    pyth_get_common_crypto_prices,
    pyth_get_prices,
    search_price_feeds,
    search_token_symbols,
)

__all__ = [
    "cached_aptos_api",
    "cached_bitcoin_api",
    "cached_nodit_api",
    "dispatch_operation",
    "resolve_symbol",
    "select_best_match",
    "get_native_token_price",
    "resolve_prices",
    "pyth_get_common_crypto_prices",
    "pyth_get_prices",
    "search_price_feeds",
    "search_token_symbols",
]
