"""
Lightweight JSON-RPC surface for MCP-style tooling.

Tool definitions are grouped by agent mode; the server exposes exactly one
mode's tools. It is stateless; caller must handle authentication to the HTTP
server hosting this adapter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from web3_mcp.config import AGENT_MODES, default_config
from web3_mcp.operations import list_operations
from web3_mcp.operations.aptos import APTOS_NETWORKS
from web3_mcp.operations.bitcoin import BITCOIN_NETWORKS, BITCOIN_PROTOCOLS
from web3_mcp.operations.evm import EVM_NETWORKS, EVM_PROTOCOLS
from web3_mcp.oracle.feeds import CHAIN_NATIVE_SYMBOLS
from web3_mcp.tools import (
    cached_aptos_api,
    cached_bitcoin_api,
    cached_nodit_api,
    get_native_token_price,
    pyth_get_common_crypto_prices,
    pyth_get_prices,
    resolve_prices,
    resolve_symbol,
    search_price_feeds,
    search_token_symbols,
    select_best_match,
)
from web3_mcp.tools.oracle import ASSET_TYPES
from web3_mcp.tools.validators import FEED_ID_REGEX, SYMBOL_REGEX

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = SYMBOL_REGEX.pattern
FEED_ID_PATTERN = FEED_ID_REGEX.pattern


def _object_schema(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required or [],
        "additionalProperties": False,
    }


ToolCallable = Callable[..., Awaitable[Any]] | Callable[..., Any]


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    callable: ToolCallable


TOOL_DEFINITIONS: Dict[str, ToolDefinition] = {
    "symbol_converter": ToolDefinition(
        name="symbol_converter",
        description=(
            "Convert a token symbol to its contract address. Well-known tokens resolve "
            "immediately; others return a keyword-search plan."
        ),
        params={
            "symbol": "string (required)",
            "chain": "string (optional, default ethereum)",
            "verified_only": "boolean (optional, default true)",
        },
        input_schema=_object_schema(
            {
                "symbol": {"type": "string", "pattern": SYMBOL_PATTERN},
                "chain": {"type": "string", "enum": list(EVM_PROTOCOLS)},
                "verified_only": {"type": "boolean"},
            },
            ["symbol"],
        ),
        callable=resolve_symbol,
    ),
    "select_token_match": ToolDefinition(
        name="select_token_match",
        description="Pick the best contract from a keyword-search response using the scoring rubric.",
        params={
            "symbol": "string (required)",
            "chain": "string (required)",
            "search_response": "object or array (required; keyword search result)",
        },
        input_schema=_object_schema(
            {
                "symbol": {"type": "string", "pattern": SYMBOL_PATTERN},
                "chain": {"type": "string", "enum": list(EVM_PROTOCOLS)},
                "search_response": {"type": ["object", "array"]},
            },
            ["symbol", "chain", "search_response"],
        ),
        callable=select_best_match,
    ),
    "cached_nodit_api": ToolDefinition(
        name="cached_nodit_api",
        description="Make Nodit API calls with pre-cached specifications for efficient operation.",
        params={
            "operation_id": "string (required)",
            "protocol": "string (required)",
            "network": "string (optional, default mainnet)",
            "request_body": "object (optional)",
        },
        input_schema=_object_schema(
            {
                "operation_id": {"type": "string", "enum": list_operations("evm")},
                "protocol": {"type": "string", "enum": list(EVM_PROTOCOLS)},
                "network": {"type": "string", "enum": list(EVM_NETWORKS)},
                "request_body": {"type": "object"},
            },
            ["operation_id", "protocol"],
        ),
        callable=cached_nodit_api,
    ),
    "cached_bitcoin_api": ToolDefinition(
        name="cached_bitcoin_api",
        description="Make Bitcoin API calls with pre-cached specifications for efficient operation.",
        params={
            "operation_id": "string (required)",
            "protocol": "string (optional, default bitcoin)",
            "network": "string (optional, default mainnet)",
            "request_body": "object (optional)",
        },
        input_schema=_object_schema(
            {
                "operation_id": {"type": "string", "enum": list_operations("bitcoin")},
                "protocol": {"type": "string", "enum": list(BITCOIN_PROTOCOLS)},
                "network": {"type": "string", "enum": list(BITCOIN_NETWORKS)},
                "request_body": {"type": "object"},
            },
            ["operation_id"],
        ),
        callable=cached_bitcoin_api,
    ),
    "cached_aptos_api": ToolDefinition(
        name="cached_aptos_api",
        description="Make Aptos Indexer API calls with pre-cached GraphQL queries for efficient operation.",
        params={
            "query_name": "string (required)",
            "network": "string (optional, default mainnet)",
            "variables": "object (optional; GraphQL variables)",
        },
        input_schema=_object_schema(
            {
                "query_name": {"type": "string", "enum": list_operations("aptos")},
                "network": {"type": "string", "enum": list(APTOS_NETWORKS)},
                "variables": {"type": "object"},
            },
            ["query_name"],
        ),
        callable=cached_aptos_api,
    ),
    "get_token_prices_by_symbols": ToolDefinition(
        name="get_token_prices_by_symbols",
        description=(
            "Price token symbols. Oracle-covered symbols are priced directly; the rest "
            "come back with a contract resolution plan."
        ),
        params={
            "symbols": "array of token symbols (required)",
            "currency": "string (optional, default USD)",
            "chain": "string (optional, default ethereum)",
        },
        input_schema=_object_schema(
            {
                "symbols": {
                    "type": "array",
                    "items": {"type": "string", "pattern": SYMBOL_PATTERN},
                    "minItems": 1,
                    "maxItems": default_config.max_symbols,
                },
                "currency": {"type": "string"},
                "chain": {"type": "string", "enum": list(EVM_PROTOCOLS)},
            },
            ["symbols"],
        ),
        callable=resolve_prices,
    ),
    "get_native_token_price_by_chain": ToolDefinition(
        name="get_native_token_price_by_chain",
        description="Get the oracle price of a chain's native token.",
        params={"chain": "string (required)"},
        input_schema=_object_schema(
            {"chain": {"type": "string", "enum": list(CHAIN_NATIVE_SYMBOLS)}},
            ["chain"],
        ),
        callable=get_native_token_price,
    ),
    "search_token_symbols": ToolDefinition(
        name="search_token_symbols",
        description="Search token symbols that have an oracle price feed.",
        params={"query": "string (required)", "limit": "integer (optional, default 10)"},
        input_schema=_object_schema(
            {
                "query": {"type": "string"},
                "limit": {"type": "integer", "minimum": 1, "maximum": default_config.max_symbol_search},
            },
            ["query"],
        ),
        callable=search_token_symbols,
    ),
    "pyth_get_prices": ToolDefinition(
        name="pyth_get_prices",
        description="Get the latest price updates for the provided price feed ids.",
        params={"price_ids": "array of feed ids (required)"},
        input_schema=_object_schema(
            {
                "price_ids": {
                    "type": "array",
                    "items": {"type": "string", "pattern": FEED_ID_PATTERN},
                    "minItems": 1,
                    "maxItems": default_config.max_feed_ids,
                }
            },
            ["price_ids"],
        ),
        callable=pyth_get_prices,
    ),
    "pyth_get_common_crypto_prices": ToolDefinition(
        name="pyth_get_common_crypto_prices",
        description="Get latest prices for BTC, ETH, SOL and SUI.",
        params={},
        input_schema=_object_schema({}),
        callable=pyth_get_common_crypto_prices,
    ),
    "pyth_search_price_feeds": ToolDefinition(
        name="pyth_search_price_feeds",
        description="Search oracle price feeds by query and optional asset type.",
        params={"query": "string (required)", "asset_type": "string (optional)"},
        input_schema=_object_schema(
            {
                "query": {"type": "string"},
                "asset_type": {"type": "string", "enum": sorted(ASSET_TYPES)},
            },
            ["query"],
        ),
        callable=search_price_feeds,
    ),
}

BASE_TOOLS = (
    "symbol_converter",
    "select_token_match",
    "cached_nodit_api",
    "cached_bitcoin_api",
    "cached_aptos_api",
)
PRICE_FEED_TOOLS = (
    "get_token_prices_by_symbols",
    "get_native_token_price_by_chain",
    "search_token_symbols",
    "pyth_get_prices",
    "pyth_get_common_crypto_prices",
    "pyth_search_price_feeds",
)

# Pricing plans reference symbol_converter, select_token_match and cached_nodit_api.
MODE_TOOLS: Mapping[str, tuple] = MappingProxyType(
    {
        "agent-base": BASE_TOOLS,
        "pyth-price-feeds": ("symbol_converter", "select_token_match", "cached_nodit_api") + PRICE_FEED_TOOLS,
        "all": BASE_TOOLS + PRICE_FEED_TOOLS,
    }
)


def build_tool_registry(mode: Optional[str] = None) -> Dict[str, ToolDefinition]:
    """Return the tool definitions exposed in ``mode``; unknown modes raise ValueError."""
    key = (mode or default_config.agent_mode).strip().lower()
    names = MODE_TOOLS.get(key)
    if names is None:
        raise ValueError(f"Unknown agent mode: {mode}. Available modes: {', '.join(AGENT_MODES)}")
    return {name: TOOL_DEFINITIONS[name] for name in names}


TOOL_REGISTRY: Dict[str, ToolDefinition] = build_tool_registry(default_config.agent_mode)


def list_tools(registry: Optional[Dict[str, ToolDefinition]] = None) -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    tools = TOOL_REGISTRY if registry is None else registry
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in tools.values()
    ]


async def call_tool(
    tool_name: str,
    params: Optional[Dict[str, Any]] = None,
    registry: Optional[Dict[str, ToolDefinition]] = None,
) -> Any:
    """Dispatch to a tool by name."""
    params = params or {}
    tools = TOOL_REGISTRY if registry is None else registry
    tool = tools.get(tool_name)
    if tool is None:
        return {"error": f"Unknown tool: {tool_name}"}
    if not isinstance(params, dict) or not set(params) <= set(tool.input_schema["properties"]):
        return {"error": "Invalid parameters."}

    # Match parameters by name; tools already handle validation and error shaping.
    try:
        result = tool.callable(**params)
        if isinstance(result, Awaitable):
            return await result  # type: ignore[return-value]
        return result
    except TypeError:
        return {"error": "Invalid parameters."}
    except Exception:
        logger.exception("Unexpected error calling tool %s", tool_name)
        return {"error": "Unexpected error while calling tool."}
