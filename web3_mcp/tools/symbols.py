"""Token symbol resolution tools."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from web3_mcp.config import Web3McpConfig, default_config
from web3_mcp.operations.dispatcher import dispatch
from web3_mcp.operations.evm import SEARCH_TOKEN_BY_KEYWORD
from web3_mcp.result import (
    STATUS_INSTRUCTION,
    STATUS_NOT_FOUND,
    STATUS_SUCCESS,
    NeedsFallback,
    Outcome,
    Resolved,
)
from web3_mcp.tokens import SUPPORTED_CHAINS, TokenInfo, lookup_token
from web3_mcp.tools.validators import normalize_chain, normalize_symbol

logger = logging.getLogger(__name__)

# Match categories, best first.
MATCH_SCORES: Tuple[Tuple[str, int], ...] = (
    ("exact_symbol", 100),
    ("partial_symbol", 75),
    ("exact_name", 50),
    ("partial_name", 25),
)
NONZERO_SUPPLY_BONUS = 1

SCORING_RUBRIC: Dict[str, Any] = {
    "order": [name for name, _ in MATCH_SCORES],
    "scores": dict(MATCH_SCORES),
    "tie_breaker": {"non_zero_total_supply": NONZERO_SUPPLY_BONUS},
    "comparison": "case-insensitive; a candidate takes its best category only",
    "ties": "first candidate in response order wins",
    "minimum_score": 1,
}

NOT_FOUND_SUGGESTIONS = [
    "Verify symbol spelling",
    "Check if token exists on this chain",
    "Try full token name instead",
    "Ensure token is an ERC20 standard",
]


def _error(message: str, **extra: Any) -> Dict[str, Any]:
    return {"status": "error", "error": message, **extra}


def not_found(symbol: str, chain: str) -> Dict[str, Any]:
    return {
        "status": STATUS_NOT_FOUND,
        "symbol": symbol,
        "chain": chain,
        "suggestions": list(NOT_FOUND_SUGGESTIONS),
    }


def lookup_static(symbol: str, chain: str, *, verified_only: bool) -> Outcome[TokenInfo]:
    """Tier 1: the in-memory table of well-known tokens."""
    token = lookup_token(chain, symbol) if verified_only else None
    if token is not None:
        return Resolved(value=token, source="static_table")
    return NeedsFallback(reason=f"Token {symbol} lookup required via keyword search")


def _search_plan(symbol: str, chain: str, config: Web3McpConfig) -> Dict[str, Any]:
    parameters = {
        "operation_id": SEARCH_TOKEN_BY_KEYWORD,
        "protocol": chain,
        "network": "mainnet",
        "request_body": {"keyword": symbol, "page": 1, "rpp": config.search_rpp},
    }
    return {
        "action": "call_cached_nodit_api",
        "tool": "cached_nodit_api",
        "parameters": parameters,
        "dispatch": dispatch(
            "evm",
            SEARCH_TOKEN_BY_KEYWORD,
            protocol=chain,
            network="mainnet",
            request_body=parameters["request_body"],
        ),
        "expected_result": "List of matching token contracts with metadata",
    }


def resolve_symbol(
    symbol: str,
    chain: str = "ethereum",
    verified_only: bool = True,
    *,
    config: Web3McpConfig = default_config,
) -> Dict[str, Any]:
    """
    Convert a token symbol into a contract address.

    Well-known tokens are answered from the static table with high confidence
    and no external call. Anything else returns ``status: "instruction"`` with a
    dispatch-ready keyword search and the rubric for picking the best match.
    """
    normalized = normalize_symbol(symbol)
    if normalized is None:
        return _error("Invalid token symbol.")
    normalized_chain = normalize_chain(chain)
    if normalized_chain not in SUPPORTED_CHAINS:
        return _error(
            "Unsupported chain.",
            error_type="UnsupportedProtocol",
            supported_chains=list(SUPPORTED_CHAINS),
        )

    outcome = lookup_static(normalized, normalized_chain, verified_only=bool(verified_only))
    if not outcome.needs_fallback:
        token: TokenInfo = outcome.value
        return {
            "status": STATUS_SUCCESS,
            "symbol": normalized,
            "chain": normalized_chain,
            "contract_address": token.contract_address,
            "name": token.display_name,
            "decimals": token.decimals,
            "verified": True,
            "source": outcome.source,
            "confidence": "high",
        }

    logger.debug("symbol %s on %s not in static table; returning search plan", normalized, normalized_chain)
    return {
        "status": STATUS_INSTRUCTION,
        "message": outcome.reason,
        "task": "token_symbol_lookup",
        "symbol": normalized,
        "chain": normalized_chain,
        "next_step": _search_plan(normalized, normalized_chain, config),
        "scoring_rubric": SCORING_RUBRIC,
        "process_result": {
            "tool": "select_token_match",
            "scoring_rubric": SCORING_RUBRIC,
            "filter_criteria": [
                "Valid contract metadata required",
                "Verify contract type is ERC20",
            ],
        },
        "fallback": {"if_no_results": not_found(normalized, normalized_chain)},
    }


def _has_supply(raw: Any) -> bool:
    if raw is None:
        return False
    try:
        return Decimal(str(raw).strip()) > 0
    except (InvalidOperation, ValueError):
        return False


def score_candidate(symbol: str, candidate: Dict[str, Any]) -> Tuple[int, Optional[str]]:
    """Score one search result against the requested symbol."""
    query = symbol.strip().lower()
    cand_symbol = str(candidate.get("symbol") or "").strip().lower()
    cand_name = str(candidate.get("name") or "").strip().lower()

    match_type: Optional[str] = None
    if cand_symbol and cand_symbol == query:
        match_type = "exact_symbol"
    elif cand_symbol and query in cand_symbol:
        match_type = "partial_symbol"
    elif cand_name and cand_name == query:
        match_type = "exact_name"
    elif cand_name and query in cand_name:
        match_type = "partial_name"

    if match_type is None:
        return 0, None
    score = dict(MATCH_SCORES)[match_type]
    if _has_supply(candidate.get("totalSupply")):
        score += NONZERO_SUPPLY_BONUS
    return score, match_type


def _candidates(search_response: Any) -> List[Dict[str, Any]]:
    items = search_response
    if isinstance(search_response, dict):
        items = search_response.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def select_best_match(
    symbol: str,
    chain: str,
    search_response: Any,
) -> Dict[str, Any]:
    """
    Apply the scoring rubric to a keyword-search response.

    Returns a medium-confidence success, or ``status: "not_found"`` with
    suggestions when no candidate matches. Never raises.
    """
    normalized = normalize_symbol(symbol)
    if normalized is None:
        return _error("Invalid token symbol.")
    normalized_chain = normalize_chain(chain) or ""

    best: Optional[Dict[str, Any]] = None
    best_score = 0
    best_type: Optional[str] = None
    for candidate in _candidates(search_response):
        if not candidate.get("address"):
            continue
        score, match_type = score_candidate(normalized, candidate)
        # Strictly greater keeps the earliest candidate on ties.
        if score > best_score:
            best, best_score, best_type = candidate, score, match_type

    if best is None:
        return not_found(normalized, normalized_chain)

    decimals = best.get("decimals")
    return {
        "status": STATUS_SUCCESS,
        "symbol": normalized,
        "chain": normalized_chain,
        "contract_address": best.get("address"),
        "name": best.get("name"),
        "decimals": decimals if isinstance(decimals, int) else None,
        "verified": best_type == "exact_symbol",
        "source": "keyword_search",
        "confidence": "medium",
        "match_type": best_type,
        "score": best_score,
    }
