"""FastAPI application wiring web3 MCP tools to HTTP routes."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from web3_mcp import mcp
from web3_mcp.config import default_config
from web3_mcp.metrics import default_metrics
from web3_mcp.oracle import default_client
from web3_mcp.tools import (
    dispatch_operation,
    get_native_token_price,
    resolve_prices,
    resolve_symbol,
    search_price_feeds,
    search_token_symbols,
)

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "error"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, default=str)


def configure_logging(log_level: str, log_format: str) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    if log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)


configure_logging(default_config.log_level, default_config.log_format)

HEALTH_STATUS = {"status": "ok"}
APP_VERSION = "0.1.0"
MCP_SERVER_NAME = "web3-mcp-server"
MCP_SERVER_VERSION = APP_VERSION


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    logger.info("web3 mcp server starting agent_mode=%s", default_config.agent_mode)
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="Web3 MCP Server",
    description="Symbol, price and capability resolution tools for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


def _log_tool_result(tool_name: str, result: Dict[str, Any], request_id: Optional[str] = None) -> None:
    if isinstance(result, dict) and result.get("error"):
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            result.get("error"),
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": result.get("error")},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=%s request_id=%s",
            tool_name,
            result.get("status", "success") if isinstance(result, dict) else "success",
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


def _tool_response(tool_name: str, result: Any, request: Request) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    _log_tool_result(tool_name, result if isinstance(result, dict) else {}, request_id)
    return JSONResponse(content=result)


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content={**HEALTH_STATUS, "agent_mode": default_config.agent_mode})


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.get("/tools/symbol/{chain}/{symbol}")
async def symbol_lookup(
    chain: str,
    symbol: str,
    request: Request,
    verified_only: bool = Query(True),
) -> JSONResponse:
    """Proxy for symbol_converter tool."""
    result = resolve_symbol(symbol, chain=chain, verified_only=verified_only)
    return _tool_response("symbol_converter", result, request)


@app.get("/tools/prices")
async def prices(
    request: Request,
    symbols: List[str] | None = Query(None),
    currency: str | None = Query(None),
    chain: str | None = Query(None),
) -> JSONResponse:
    """Proxy for get_token_prices_by_symbols tool; accepts repeated or comma-separated symbols."""
    raw: Any = symbols
    if symbols is not None and len(symbols) == 1:
        raw = symbols[0]
    result = await resolve_prices(raw, currency=currency, chain=chain)
    return _tool_response("get_token_prices_by_symbols", result, request)


@app.get("/tools/native_price/{chain}")
async def native_price(chain: str, request: Request) -> JSONResponse:
    """Proxy for get_native_token_price_by_chain tool."""
    result = await get_native_token_price(chain)
    return _tool_response("get_native_token_price_by_chain", result, request)


@app.get("/tools/oracle/search")
async def oracle_search(
    request: Request,
    query: str | None = Query(None),
    asset_type: str | None = Query(None),
) -> JSONResponse:
    """Proxy for pyth_search_price_feeds tool."""
    result = await search_price_feeds(query, asset_type)
    return _tool_response("pyth_search_price_feeds", result, request)


@app.get("/tools/oracle/symbols")
async def oracle_symbols(
    request: Request,
    query: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
) -> JSONResponse:
    """Proxy for search_token_symbols tool."""
    result = await search_token_symbols(query, limit)
    return _tool_response("search_token_symbols", result, request)


@app.post("/tools/dispatch/{family}/{operation_id}")
async def dispatch_route(family: str, operation_id: str, request: Request) -> JSONResponse:
    """
    Describe one registry operation.

    Body: ``{"protocol": ..., "network": ..., "request_body": {...}}``; every
    field is optional.
    """
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        result: Dict[str, Any] = {"status": "error", "error": "Request body must be an object."}
    else:
        result = dispatch_operation(
            family,
            operation_id,
            protocol=body.get("protocol"),
            network=body.get("network"),
            request_body=body.get("request_body"),
        )
    return _tool_response("dispatch", result, request)


@app.post("/mcp")
async def mcp_gateway(request: Request) -> JSONResponse:
    """
    Minimal JSON-RPC-like gateway for MCP-style integrations.

    Supported methods:
      - initialize
      - list_tools / tools/list
      - call_tool / tools/call
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(payload: Dict[str, Any], status_code: int = 200, *, outcome: str, method_label: Optional[str] = None, tool_label: Optional[str] = None, error_code: Optional[int] = None) -> JSONResponse:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id"),
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    try:
        body = await request.json()
    except ValueError:
        payload = _jsonrpc_error_payload(None, -32700, "Parse error")
        return _respond(payload, status_code=400, outcome="error", method_label=None, error_code=-32700)

    if not isinstance(body, dict):
        payload = _jsonrpc_error_payload(None, -32600, "Invalid request")
        return _respond(payload, status_code=400, outcome="error", method_label=None, error_code=-32600)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
        return _respond(payload, outcome="error", method_label=method, error_code=-32602)

    if not method:
        payload = _jsonrpc_error_payload(rpc_id, -32600, "Invalid request")
        return _respond(payload, outcome="error", method_label=None, error_code=-32600)

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)

        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

    if method in ("list_tools", "tools/list"):
        result = {"tools": mcp.list_tools()}
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("tool") or params.get("name")
        tool_params = params.get("params")
        if tool_params is None:
            tool_params = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)
        if not isinstance(tool_params, dict):
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, tool_label=tool_name, error_code=-32602)
        result = await mcp.call_tool(tool_name, tool_params)
        _log_tool_result(tool_name, result if isinstance(result, dict) else {}, request_id)
        wrapped = _wrap_tool_result(result)
        return _respond(
            _jsonrpc_success_payload(rpc_id, wrapped),
            outcome="success",
            method_label=method,
            tool_label=tool_name,
        )

    if method in ("notifications/initialized", "initialized"):
        # Notifications carry no JSON-RPC response body.
        return Response(status_code=204)

    payload = _jsonrpc_error_payload(rpc_id, -32601, "Method not found")
    return _respond(payload, outcome="error", method_label=method, error_code=-32601)


# Run with: uvicorn web3_mcp.server:app --reload


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _wrap_tool_result(result: Any) -> Dict[str, Any]:
    """
    Shape tool outputs into MCP-friendly content array.
    """
    # Tool-level errors are returned in-band with isError flag.
    if isinstance(result, dict) and result.get("error"):
        message = result.get("error") or "Error"
        return {
            "content": [{"type": "text", "text": str(message)}],
            "isError": True,
            "structuredContent": result,
        }

    if isinstance(result, str):
        return {"content": [{"type": "text", "text": result}]}

    try:
        text_repr = json.dumps(result, ensure_ascii=True)
    except (TypeError, ValueError):
        text_repr = str(result)
    return {
        "content": [{"type": "text", "text": text_repr}],
        "structuredContent": result,
    }
