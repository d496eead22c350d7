from web3_mcp.tools.dispatch import cached_aptos_api, cached_bitcoin_api, cached_nodit_api, dispatch_operation


def test_cached_nodit_api_routes_to_evm():
    result = cached_nodit_api("getNativeBalanceByAccount", "base", None, {"account": "0x" + "1" * 40})
    assert result["status"] == "success"
    assert result["backend_family"] == "evm"
    assert result["call_descriptor"]["resolvedPath"] == "/base/mainnet/native/getNativeBalanceByAccount"
    assert result["validation"]["valid_request"] is True


def test_cached_bitcoin_api_rejects_evm_operation():
    result = cached_bitcoin_api("getGasPrice")
    assert result["status"] == "error"
    assert result["error_type"] == "UnknownOperation"
    assert "getBlockByHashOrNumber" in result["available_operations"]


def test_cached_aptos_api_wraps_variables():
    result = cached_aptos_api("coin_infos", variables={"coin_types": ["0x1::aptos_coin::AptosCoin"]})
    body = result["call_descriptor"]["requestBody"]
    assert body["variables"] == {"coin_types": ["0x1::aptos_coin::AptosCoin"]}
    assert result["protocol"] == "aptos"
    assert result["network"] == "mainnet"


def test_body_must_be_object():
    assert cached_nodit_api("getGasPrice", "ethereum", request_body=["x"])["status"] == "error"
    assert cached_aptos_api("coin_infos", variables="x")["status"] == "error"


def test_missing_operation_id():
    assert cached_nodit_api(None)["error"] == "operation_id is required."
    assert cached_aptos_api("")["error"] == "query_name is required."
    assert dispatch_operation(None, "getGasPrice")["error"] == "family is required."


def test_dispatch_operation_generic():
    result = dispatch_operation("bitcoin", "getTotalTransactionCountByAccount", "dogecoin", "testnet", {})
    assert result["status"] == "success"
    assert result["call_descriptor"]["resolvedPath"].startswith("/dogecoin/testnet/")
    assert result["validation"]["valid_request"] is False
