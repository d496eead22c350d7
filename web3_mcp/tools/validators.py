"""Shared validation helpers for web3 MCP tools."""

from __future__ import annotations

import re
from typing import Any, List, Optional

# Tickers: letters, digits and a few separators seen in wrapped/bridged tokens.
SYMBOL_REGEX = re.compile(r"^[A-Za-z0-9.\-_$+]{1,32}$")
FEED_ID_REGEX = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def normalize_symbol(symbol: Optional[str]) -> Optional[str]:
    """Uppercase and strip a token symbol; None when it is not a plausible ticker."""
    if not symbol or not isinstance(symbol, str):
        return None
    stripped = symbol.strip()
    if not SYMBOL_REGEX.fullmatch(stripped):
        return None
    return stripped.upper()


def normalize_chain(chain: Optional[str]) -> Optional[str]:
    if not chain or not isinstance(chain, str):
        return None
    return chain.strip().lower() or None


def is_valid_feed_id(feed_id: Optional[str]) -> bool:
    if not feed_id or not isinstance(feed_id, str):
        return False
    return bool(FEED_ID_REGEX.fullmatch(feed_id.strip()))


def clamp_limit(value: Optional[int], *, default: int, max_value: int) -> int:
    """Clamp limit-style integers to configured bounds."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed <= 0:
        return default
    return min(parsed, max_value)


def parse_string_list(value: Any, *, max_items: int) -> Optional[List[str]]:
    """
    Accept a list of strings or a comma-separated string.

    Returns None when the input is not a list of non-empty strings or exceeds
    ``max_items``.
    """
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = []
        for part in value:
            if not isinstance(part, str):
                return None
            items.append(part.strip())
    else:
        return None
    items = [item for item in items if item]
    if not items or len(items) > max_items:
        return None
    return items
