import pytest

from web3_mcp.config import Web3McpConfig
from web3_mcp.tokens import MAJOR_TOKENS
from web3_mcp.tools.symbols import resolve_symbol, score_candidate, select_best_match

STATIC_ENTRIES = [(chain, symbol) for chain, table in MAJOR_TOKENS.items() for symbol in table]


def test_static_tier_resolves_without_lookup():
    result = resolve_symbol("usdc", "ethereum")
    assert result["status"] == "success"
    assert result["symbol"] == "USDC"
    assert result["contract_address"] == "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
    assert result["decimals"] == 6
    assert result["confidence"] == "high"
    assert result["source"] == "static_table"


@pytest.mark.parametrize("chain,symbol", STATIC_ENTRIES)
def test_every_static_token_resolves_from_table(chain, symbol):
    token = MAJOR_TOKENS[chain][symbol]
    result = resolve_symbol(symbol.lower(), chain)
    assert result["status"] == "success"
    assert result["source"] == "static_table"
    assert result["contract_address"] == token.contract_address
    assert result["decimals"] == token.decimals


def test_unknown_symbol_returns_search_plan():
    result = resolve_symbol("PEPE", "ethereum", config=Web3McpConfig(search_rpp=20))
    assert result["status"] == "instruction"
    step = result["next_step"]
    assert step["tool"] == "cached_nodit_api"
    assert step["parameters"]["request_body"] == {"keyword": "PEPE", "page": 1, "rpp": 20}
    dispatched = step["dispatch"]
    assert dispatched["status"] == "success"
    assert dispatched["operation"] == "searchTokenContractMetadataByKeyword"
    assert dispatched["call_descriptor"]["resolvedPath"] == (
        "/ethereum/mainnet/token/searchTokenContractMetadataByKeyword"
    )
    assert result["process_result"]["scoring_rubric"]["scores"]["exact_symbol"] == 100
    assert result["fallback"]["if_no_results"]["status"] == "not_found"


def test_verified_only_false_skips_static_table():
    result = resolve_symbol("USDC", "polygon", verified_only=False)
    assert result["status"] == "instruction"


def test_invalid_inputs():
    assert resolve_symbol("", "ethereum") == {"status": "error", "error": "Invalid token symbol."}
    result = resolve_symbol("USDC", "solana")
    assert result["error"] == "Unsupported chain."
    assert "ethereum" in result["supported_chains"]


def test_score_candidate_categories():
    assert score_candidate("USDC", {"symbol": "usdc", "name": "x"}) == (100, "exact_symbol")
    assert score_candidate("USDC", {"symbol": "USDC.e", "name": "x"}) == (75, "partial_symbol")
    assert score_candidate("PEPE", {"symbol": "XYZ", "name": "pepe"}) == (50, "exact_name")
    assert score_candidate("PEPE", {"symbol": "XYZ", "name": "Pepe Token"}) == (25, "partial_name")
    assert score_candidate("PEPE", {"symbol": "XYZ", "name": "Other"}) == (0, None)
    assert score_candidate("USDC", {"symbol": "USDC", "totalSupply": "1000"}) == (101, "exact_symbol")


def test_select_best_match_prefers_exact_symbol():
    response = {
        "items": [
            {"address": "0x1", "symbol": "PEPE2", "name": "Pepe Two", "totalSupply": "10"},
            {"address": "0x2", "symbol": "PEPE", "name": "Pepe", "totalSupply": "0", "decimals": 18},
        ]
    }
    result = select_best_match("pepe", "ethereum", response)
    assert result["status"] == "success"
    assert result["contract_address"] == "0x2"
    assert result["match_type"] == "exact_symbol"
    assert result["confidence"] == "medium"
    assert result["source"] == "keyword_search"
    assert result["decimals"] == 18


def test_select_best_match_supply_breaks_tie():
    response = [
        {"address": "0x1", "symbol": "PEPE", "totalSupply": "0"},
        {"address": "0x2", "symbol": "PEPE", "totalSupply": "420690000000000"},
    ]
    result = select_best_match("PEPE", "ethereum", response)
    assert result["contract_address"] == "0x2"
    assert result["score"] == 101


def test_select_best_match_first_wins_on_equal_scores():
    response = [
        {"address": "0x1", "symbol": "PEPE", "totalSupply": "5"},
        {"address": "0x2", "symbol": "PEPE", "totalSupply": "9"},
    ]
    assert select_best_match("PEPE", "ethereum", response)["contract_address"] == "0x1"


def test_select_best_match_not_found():
    result = select_best_match("PEPE", "ethereum", {"items": [{"address": "0x1", "symbol": "DOGE", "name": "Doge"}]})
    assert result["status"] == "not_found"
    assert result["symbol"] == "PEPE"
    assert result["suggestions"]


def test_select_best_match_tolerates_garbage():
    assert select_best_match("PEPE", "ethereum", None)["status"] == "not_found"
    assert select_best_match("PEPE", "ethereum", {"items": ["x", 3]})["status"] == "not_found"
    # Candidates without an address are skipped.
    assert select_best_match("PEPE", "ethereum", [{"symbol": "PEPE"}])["status"] == "not_found"
