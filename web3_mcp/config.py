"""
Configuration helpers for the web3 MCP server.

This module centralizes the oracle endpoint, default timeouts, the active agent
mode and logging settings. Values come from the environment with safe fallbacks;
nothing here is mutated after import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Default connection settings
DEFAULT_HERMES_URL = os.getenv("PYTH_HERMES_URL", "https://hermes.pyth.network")


def _load_timeout() -> float:
    raw_timeout = os.getenv("WEB3_MCP_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 10.0
    return 10.0


DEFAULT_TIMEOUT = _load_timeout()

# Agent modes select which tool set the server exposes.
AGENT_MODE_ENV_VAR = "WEB3_MCP_AGENT_MODE"
DEFAULT_AGENT_MODE = "agent-base"
AGENT_MODES = ("agent-base", "pyth-price-feeds", "all")


def _load_agent_mode() -> str:
    raw_mode = os.getenv(AGENT_MODE_ENV_VAR)
    if raw_mode and raw_mode.strip():
        return raw_mode.strip().lower()
    return DEFAULT_AGENT_MODE


# Safety limits
MAX_SYMBOLS_PER_REQUEST = 50
MAX_FEED_IDS_PER_REQUEST = 100
DEFAULT_SEARCH_RPP = 20
MAX_SYMBOL_SEARCH_RESULTS = 50
DEFAULT_SYMBOL_SEARCH_RESULTS = 10
DEFAULT_CURRENCY = "USD"
DEFAULT_PRICING_CHAIN = "ethereum"
LOG_LEVEL = os.getenv("WEB3_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("WEB3_MCP_LOG_FORMAT", "json")  # json or plain


@dataclass(slots=True)
class Web3McpConfig:
    """Runtime configuration for the resolution core and its HTTP host."""

    hermes_url: str = DEFAULT_HERMES_URL
    timeout: float = DEFAULT_TIMEOUT
    agent_mode: str = _load_agent_mode()
    max_symbols: int = MAX_SYMBOLS_PER_REQUEST
    max_feed_ids: int = MAX_FEED_IDS_PER_REQUEST
    search_rpp: int = DEFAULT_SEARCH_RPP
    max_symbol_search: int = MAX_SYMBOL_SEARCH_RESULTS
    default_symbol_search: int = DEFAULT_SYMBOL_SEARCH_RESULTS
    default_currency: str = DEFAULT_CURRENCY
    default_pricing_chain: str = DEFAULT_PRICING_CHAIN
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT


default_config = Web3McpConfig()
