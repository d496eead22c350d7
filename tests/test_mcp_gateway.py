import pytest
from fastapi.testclient import TestClient

from web3_mcp import mcp
from web3_mcp.server import MCP_SERVER_NAME, MCP_SERVER_VERSION, app


def test_mcp_list_tools():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "list_tools"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["jsonrpc"] == "2.0"
    assert data["id"] == 1
    tools = data["result"]["tools"]
    assert [tool["name"] for tool in tools] == list(mcp.TOOL_REGISTRY)
    symbol_tool = next(t for t in tools if t["name"] == "symbol_converter")
    assert symbol_tool["inputSchema"]["type"] == "object"
    assert symbol_tool["inputSchema"]["required"] == ["symbol"]


def test_mcp_call_tool_symbol_converter():
    client = TestClient(app)
    resp = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "id": 2,
            "method": "call_tool",
            "params": {"tool": "symbol_converter", "params": {"symbol": "USDT", "chain": "arbitrum"}},
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == 2
    result = data["result"]
    assert "isError" not in result
    assert result["structuredContent"]["contract_address"] == "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9"
    assert result["content"][0]["type"] == "text"


def test_mcp_tools_call_error_is_flagged():
    client = TestClient(app)
    resp = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "id": 4,
            "method": "tools/call",
            "params": {"name": "cached_nodit_api", "arguments": {"operation_id": "nope", "protocol": "ethereum"}},
        },
    )
    data = resp.json()
    result = data["result"]
    assert result["isError"] is True
    assert result["structuredContent"]["error_type"] == "UnknownOperation"


def test_mcp_initialize():
    client = TestClient(app)
    resp = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "id": 10,
            "method": "initialize",
            "params": {
                "protocolVersion": "2025-03-26",
                "capabilities": {},
                "clientInfo": {"name": "test-client", "version": "0.0.0"},
            },
        },
    )
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["protocolVersion"] == "2025-03-26"
    assert result["serverInfo"]["name"] == MCP_SERVER_NAME
    assert result["serverInfo"]["version"] == MCP_SERVER_VERSION
    assert result["capabilities"]["tools"]["listChanged"] is False


def test_mcp_initialize_requires_protocol_version():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 5, "method": "initialize", "params": {}})
    assert resp.json()["error"]["code"] == -32602


def test_mcp_unknown_method_returns_error():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "not_a_real_method"})
    assert resp.status_code == 200
    assert resp.json()["error"]["code"] == -32601


def test_mcp_invalid_params_type():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 11, "method": "call_tool", "params": []})
    data = resp.json()
    assert data["id"] == 11
    assert data["error"]["code"] == -32602


def test_mcp_parse_error_invalid_json():
    client = TestClient(app)
    resp = client.post("/mcp", content="{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == -32700


def test_mcp_missing_method_invalid_request():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 12})
    assert resp.json()["error"]["code"] == -32600


def test_mcp_initialized_notification_ignored():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert resp.status_code == 204
    assert resp.text == ""


def test_mcp_call_tool_missing_name_is_invalid_params():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 13, "method": "call_tool", "params": {"params": {}}})
    assert resp.json()["error"]["code"] == -32602


def test_build_tool_registry_modes():
    base = mcp.build_tool_registry("agent-base")
    pyth = mcp.build_tool_registry("pyth-price-feeds")
    everything = mcp.build_tool_registry("all")
    assert "cached_aptos_api" in base
    assert "pyth_get_prices" not in base
    assert "get_token_prices_by_symbols" in pyth
    assert "cached_nodit_api" in pyth
    assert "cached_bitcoin_api" not in pyth
    assert set(everything) == set(base) | set(pyth)


def test_build_tool_registry_unknown_mode():
    with pytest.raises(ValueError) as excinfo:
        mcp.build_tool_registry("whale-monitor")
    assert "agent-base" in str(excinfo.value)


def test_list_tools_for_explicit_registry():
    tools = mcp.list_tools(mcp.build_tool_registry("pyth-price-feeds"))
    assert any(tool["name"] == "pyth_search_price_feeds" for tool in tools)


@pytest.mark.asyncio
async def test_call_tool_outside_mode_is_unknown():
    result = await mcp.call_tool("pyth_get_prices", {"price_ids": []}, mcp.build_tool_registry("agent-base"))
    assert result == {"error": "Unknown tool: pyth_get_prices"}


@pytest.mark.asyncio
async def test_call_tool_bad_arguments():
    result = await mcp.call_tool("symbol_converter", {"bogus": 1}, mcp.build_tool_registry("agent-base"))
    assert result == {"error": "Invalid parameters."}


@pytest.mark.asyncio
async def test_call_tool_rejects_internal_keyword_overrides():
    registry = mcp.build_tool_registry("all")
    result = await mcp.call_tool("symbol_converter", {"symbol": "USDC", "config": {}}, registry)
    assert result == {"error": "Invalid parameters."}
    result = await mcp.call_tool("pyth_get_common_crypto_prices", {"client": None}, registry)
    assert result == {"error": "Invalid parameters."}


@pytest.mark.asyncio
async def test_call_tool_awaits_async_tools(monkeypatch):
    async def fake_prices(symbols=None, currency=None, chain=None):
        return {"status": "success", "symbols": symbols}

    registry = mcp.build_tool_registry("pyth-price-feeds")
    monkeypatch.setattr(registry["get_token_prices_by_symbols"], "callable", fake_prices)
    result = await mcp.call_tool("get_token_prices_by_symbols", {"symbols": ["BTC"]}, registry)
    assert result == {"status": "success", "symbols": ["BTC"]}
