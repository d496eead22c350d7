"""
Capability dispatcher: turn (family, operation id, path params, body) into a
ready-to-execute call descriptor.

Nothing here touches the network. The descriptor is handed verbatim to the
transport that actually performs the call.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from web3_mcp.operations.registry import get_family, get_spec
from web3_mcp.operations.schema import validate_request_body
from web3_mcp.operations.specs import (
    BackendFamily,
    OperationSpec,
    UnknownBackendFamilyError,
    UnknownOperationError,
    UnsupportedProtocolError,
)
from web3_mcp.result import STATUS_ERROR, STATUS_SUCCESS, NeedsFallback, Outcome, Resolved

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CallDescriptor:
    resolved_path: str
    http_method: str
    backend_family: str
    network: str
    request_body: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resolvedPath": self.resolved_path,
            "httpMethod": self.http_method,
            "backendFamily": self.backend_family,
            "network": self.network,
            "requestBody": copy.deepcopy(self.request_body),
        }


@dataclass(frozen=True, slots=True)
class DispatchPlan:
    family: BackendFamily
    spec: OperationSpec
    protocol: str
    network: str
    request_body: Dict[str, Any]
    descriptor: CallDescriptor


def _build_request_body(spec: OperationSpec, body: Dict[str, Any]) -> Dict[str, Any]:
    if spec.graphql_query is not None:
        return {"query": spec.graphql_query, "variables": copy.deepcopy(body)}
    return copy.deepcopy(body)


def plan_call(
    family: str,
    operation_id: str,
    protocol: Optional[str] = None,
    network: Optional[str] = None,
    request_body: Optional[Dict[str, Any]] = None,
) -> Outcome[DispatchPlan]:
    """
    Resolve an operation against the static registry.

    Returns ``Resolved`` with the plan, or ``NeedsFallback`` carrying an error
    payload that lists every valid choice so the caller can correct itself.
    """
    try:
        backend = get_family(family)
        spec = get_spec(backend.name, operation_id)
    except UnknownBackendFamilyError as exc:
        return NeedsFallback(
            reason=str(exc),
            status=STATUS_ERROR,
            plan={
                "error_type": exc.code,
                "available_families": exc.available,
            },
        )
    except UnknownOperationError as exc:
        return NeedsFallback(
            reason=str(exc),
            status=STATUS_ERROR,
            plan={
                "error_type": exc.code,
                "backend_family": exc.family,
                "available_operations": exc.available,
            },
        )

    effective_protocol = protocol.strip().lower() if isinstance(protocol, str) and protocol.strip() else backend.supported_protocols[0]
    effective_network = network.strip().lower() if isinstance(network, str) and network.strip() else backend.default_network
    body = dict(request_body or {})

    descriptor = CallDescriptor(
        resolved_path=spec.resolve_path(effective_protocol, effective_network),
        http_method=spec.http_method,
        backend_family=backend.name,
        network=effective_network,
        request_body=_build_request_body(spec, body),
    )
    return Resolved(
        value=DispatchPlan(
            family=backend,
            spec=spec,
            protocol=effective_protocol,
            network=effective_network,
            request_body=body,
            descriptor=descriptor,
        ),
        source="registry",
    )


def dispatch(
    family: str,
    operation_id: str,
    protocol: Optional[str] = None,
    network: Optional[str] = None,
    request_body: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Validate and route one operation, returning a JSON-serializable payload.

    Unknown families and operations produce ``status: "error"`` with the list of
    valid values. An unsupported protocol or a body that does not match the
    request schema still yields a descriptor; the ``validation`` block reports
    the problem.
    """
    outcome = plan_call(family, operation_id, protocol, network, request_body)
    if outcome.needs_fallback:
        logger.debug("dispatch rejected family=%s operation=%s", family, operation_id)
        return {"status": outcome.status, "error": outcome.reason, "message": outcome.reason, **outcome.plan}

    plan: DispatchPlan = outcome.value
    backend = plan.family
    request_errors = []
    protocol_supported = backend.supports_protocol(plan.protocol)
    if not protocol_supported:
        request_errors.append(
            str(UnsupportedProtocolError(backend.name, plan.protocol, backend.supported_protocols))
        )
    network_supported = backend.supports_network(plan.network)
    if not network_supported:
        request_errors.append(f"Network {plan.network!r} is not supported by {backend.name}")
    request_errors.extend(validate_request_body(plan.spec.request_schema, plan.request_body))

    descriptor = plan.descriptor.to_dict()
    return {
        "status": STATUS_SUCCESS,
        "operation": plan.spec.operation_id,
        "backend_family": backend.name,
        "protocol": plan.protocol,
        "network": plan.network,
        "api_spec": plan.spec.to_dict(protocol=plan.protocol, network=plan.network),
        "call_descriptor": descriptor,
        "call_instruction": {
            "tool": backend.executor_tool,
            "parameters": {
                "protocol": plan.protocol,
                "network": plan.network,
                "operationId": plan.spec.operation_id,
                "requestBody": copy.deepcopy(descriptor["requestBody"]),
            },
        },
        "request_body": copy.deepcopy(plan.request_body),
        "validation": {
            "valid_request": not request_errors,
            "protocol_supported": protocol_supported,
            "network_supported": network_supported,
            "supported_protocols": list(backend.supported_protocols),
            "operation_cached": True,
            "request_errors": request_errors,
        },
    }
