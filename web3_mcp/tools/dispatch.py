"""Tools that route calls through the cached operation registries."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from web3_mcp.operations.dispatcher import dispatch

logger = logging.getLogger(__name__)


def _check_body(value: Any) -> Optional[Dict[str, Any]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        return None
    return value


def _operation_id_error(field_name: str) -> Dict[str, Any]:
    return {"status": "error", "error": f"{field_name} is required."}


def cached_nodit_api(
    operation_id: Optional[str] = None,
    protocol: Optional[str] = None,
    network: Optional[str] = None,
    request_body: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Describe a Nodit web3 data API call for an EVM chain."""
    if not operation_id or not isinstance(operation_id, str):
        return _operation_id_error("operation_id")
    body = _check_body(request_body)
    if body is None:
        return {"status": "error", "error": "request_body must be an object."}
    return dispatch("evm", operation_id.strip(), protocol, network, body)


def cached_bitcoin_api(
    operation_id: Optional[str] = None,
    protocol: Optional[str] = None,
    network: Optional[str] = None,
    request_body: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Describe a Nodit Bitcoin API call (bitcoin or dogecoin)."""
    if not operation_id or not isinstance(operation_id, str):
        return _operation_id_error("operation_id")
    body = _check_body(request_body)
    if body is None:
        return {"status": "error", "error": "request_body must be an object."}
    return dispatch("bitcoin", operation_id.strip(), protocol, network, body)


def cached_aptos_api(
    query_name: Optional[str] = None,
    network: Optional[str] = None,
    variables: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Describe an Aptos indexer GraphQL call.

    ``variables`` are validated against the query's variable schema; the call
    descriptor carries the full ``{query, variables}`` body.
    """
    if not query_name or not isinstance(query_name, str):
        return _operation_id_error("query_name")
    body = _check_body(variables)
    if body is None:
        return {"status": "error", "error": "variables must be an object."}
    return dispatch("aptos", query_name.strip(), "aptos", network, body)


def dispatch_operation(
    family: Optional[str] = None,
    operation_id: Optional[str] = None,
    protocol: Optional[str] = None,
    network: Optional[str] = None,
    request_body: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Generic entry point used by the HTTP dispatch route."""
    if not family or not isinstance(family, str):
        return {"status": "error", "error": "family is required."}
    if not operation_id or not isinstance(operation_id, str):
        return _operation_id_error("operation_id")
    body = _check_body(request_body)
    if body is None:
        return {"status": "error", "error": "request_body must be an object."}
    result = dispatch(family, operation_id.strip(), protocol, network, body)
    logger.debug("dispatch family=%s operation=%s status=%s", family, operation_id, result.get("status"))
    return result
