from web3_mcp.config import (
    AGENT_MODES,
    DEFAULT_AGENT_MODE,
    Web3McpConfig,
    _load_agent_mode,
    _load_timeout,
)


def test_load_timeout_invalid_env(monkeypatch):
    monkeypatch.setenv("WEB3_MCP_HTTP_TIMEOUT", "not-a-number")
    assert _load_timeout() == 10.0  # falls back to default on parse error


def test_load_timeout_valid_env(monkeypatch):
    monkeypatch.setenv("WEB3_MCP_HTTP_TIMEOUT", "5.5")
    assert _load_timeout() == 5.5


def test_agent_mode_from_env(monkeypatch):
    monkeypatch.setenv("WEB3_MCP_AGENT_MODE", " Pyth-Price-Feeds ")
    assert _load_agent_mode() == "pyth-price-feeds"


def test_agent_mode_default(monkeypatch):
    monkeypatch.delenv("WEB3_MCP_AGENT_MODE", raising=False)
    assert _load_agent_mode() == DEFAULT_AGENT_MODE
    assert DEFAULT_AGENT_MODE in AGENT_MODES


def test_config_overrides():
    config = Web3McpConfig(hermes_url="http://localhost:4000", max_symbols=3)
    assert config.hermes_url == "http://localhost:4000"
    assert config.max_symbols == 3
    assert config.default_currency == "USD"
    assert config.default_pricing_chain == "ethereum"
