import json

from web3_mcp.operations import dispatch, list_operations, plan_call


def test_dispatch_success_substitutes_path():
    result = dispatch("evm", "getTokenPricesByContracts", "ethereum", None, {"contractAddresses": []})
    assert result["status"] == "success"
    assert result["network"] == "mainnet"
    descriptor = result["call_descriptor"]
    assert descriptor == {
        "resolvedPath": "/ethereum/mainnet/token/getTokenPricesByContracts",
        "httpMethod": "POST",
        "backendFamily": "evm",
        "network": "mainnet",
        "requestBody": {"contractAddresses": []},
    }
    assert result["call_instruction"]["tool"] == "call_nodit_api"
    assert result["call_instruction"]["parameters"]["operationId"] == "getTokenPricesByContracts"
    assert result["validation"]["protocol_supported"] is True
    assert result["validation"]["operation_cached"] is True
    assert result["validation"]["valid_request"] is True


def test_dispatch_unknown_operation_lists_all_ids():
    result = dispatch("evm", "getNftMetadata", "ethereum")
    assert result["status"] == "error"
    assert result["error_type"] == "UnknownOperation"
    assert result["backend_family"] == "evm"
    assert result["available_operations"] == list_operations("evm")
    assert "getNftMetadata" in result["error"]


def test_dispatch_unknown_family():
    result = dispatch("solana", "getBalance")
    assert result["status"] == "error"
    assert result["error_type"] == "UnknownBackendFamily"
    assert result["available_families"] == ["evm", "bitcoin", "aptos"]


def test_dispatch_is_pure():
    args = ("bitcoin", "getUnspentTransactionOutputsByAccount", "bitcoin", "testnet", {"accountAddress": "bc1qxyz"})
    first = json.dumps(dispatch(*args), sort_keys=True)
    second = json.dumps(dispatch(*args), sort_keys=True)
    assert first == second


def test_dispatch_does_not_alias_request_body():
    body = {"keyword": "PEPE"}
    result = dispatch("evm", "searchTokenContractMetadataByKeyword", "ethereum", None, body)
    result["request_body"]["keyword"] = "changed"
    result["call_descriptor"]["requestBody"]["keyword"] = "changed"
    assert body == {"keyword": "PEPE"}
    again = dispatch("evm", "searchTokenContractMetadataByKeyword", "ethereum", None, body)
    assert again["request_body"] == {"keyword": "PEPE"}


def test_unsupported_protocol_flagged_not_raised():
    result = dispatch("evm", "getGasPrice", "solana")
    assert result["status"] == "success"
    validation = result["validation"]
    assert validation["protocol_supported"] is False
    assert validation["valid_request"] is False
    assert any("solana" in error for error in validation["request_errors"])
    assert validation["supported_protocols"] == ["ethereum", "polygon", "arbitrum", "base", "optimism"]


def test_unsupported_network_flagged():
    result = dispatch("bitcoin", "getBlockByHashOrNumber", "bitcoin", "sepolia", {"blockHashOrNumber": "1"})
    assert result["validation"]["network_supported"] is False
    assert result["validation"]["valid_request"] is False


def test_missing_required_field_reported():
    result = dispatch("evm", "searchTokenContractMetadataByKeyword", "ethereum", None, {"rpp": 5})
    assert result["validation"]["valid_request"] is False
    assert "requestBody.keyword: is required" in result["validation"]["request_errors"]


def test_protocol_defaults_to_first_supported():
    result = dispatch("bitcoin", "getTotalTransactionCountByAccount")
    assert result["protocol"] == "bitcoin"
    assert result["call_descriptor"]["resolvedPath"].startswith("/bitcoin/mainnet/")


def test_aptos_body_wrapped_as_graphql():
    variables = {"address": "0x1"}
    result = dispatch("aptos", "current_coin_balances", "aptos", "testnet", variables)
    body = result["call_descriptor"]["requestBody"]
    assert set(body) == {"query", "variables"}
    assert body["variables"] == variables
    assert "current_coin_balances" in body["query"]
    assert result["call_descriptor"]["resolvedPath"] == "/aptos/testnet/graphql"
    assert result["call_instruction"]["tool"] == "call_nodit_aptos_indexer_api"
    assert result["api_spec"]["query"] == body["query"]


def test_plan_call_returns_fallback_for_unknown_operation():
    outcome = plan_call("aptos", "unknown_query")
    assert outcome.needs_fallback
    assert outcome.status == "error"
    assert outcome.plan["error_type"] == "UnknownOperation"
