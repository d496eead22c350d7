"""
Typed records and errors for the remote operation registry.

An ``OperationSpec`` describes one remote call (path template, method and the
request/response schema). A ``BackendFamily`` groups the specs of one external
data source together with the protocols and networks it accepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


class RegistryError(Exception):
    """Base exception for registry lookups."""

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


class UnknownBackendFamilyError(RegistryError):
    """Raised when a backend family name is not registered."""

    def __init__(self, family: str, available: List[str]) -> None:
        super().__init__(f"Unknown backend family: {family}", code="UnknownBackendFamily")
        self.family = family
        self.available = available


class UnknownOperationError(RegistryError):
    """Raised when an operation id is not part of a family's registry."""

    def __init__(self, family: str, operation_id: str, available: List[str]) -> None:
        super().__init__(f"Unknown {family} operation: {operation_id}", code="UnknownOperation")
        self.family = family
        self.operation_id = operation_id
        self.available = available


class UnsupportedProtocolError(RegistryError):
    """Raised when a protocol/chain is outside a family's supported set."""

    def __init__(self, family: str, protocol: str, supported: Tuple[str, ...]) -> None:
        super().__init__(f"Protocol {protocol!r} is not supported by {family}", code="UnsupportedProtocol")
        self.family = family
        self.protocol = protocol
        self.supported = supported


@dataclass(frozen=True, slots=True)
class OperationSpec:
    operation_id: str
    path_template: str
    http_method: str
    description: str
    request_schema: Mapping[str, Any]
    response_schema: Mapping[str, Any]
    # GraphQL document for query-style families; None for REST operations.
    graphql_query: Optional[str] = None

    def resolve_path(self, protocol: str, network: str) -> str:
        return self.path_template.replace("{protocol}", protocol).replace("{network}", network)

    def to_dict(self, *, protocol: str, network: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "operationId": self.operation_id,
            "path": self.resolve_path(protocol, network),
            "method": self.http_method,
            "description": self.description,
            "requestSchema": _thaw(self.request_schema),
            "responseSchema": _thaw(self.response_schema),
        }
        if self.graphql_query is not None:
            payload["query"] = self.graphql_query
        return payload


@dataclass(frozen=True, slots=True)
class BackendFamily:
    name: str
    operations: Mapping[str, OperationSpec]
    supported_protocols: Tuple[str, ...]
    supported_networks: Tuple[str, ...]
    executor_tool: str
    default_network: str = "mainnet"

    def operation_ids(self) -> List[str]:
        return list(self.operations.keys())

    def supports_protocol(self, protocol: Optional[str]) -> bool:
        return protocol in self.supported_protocols

    def supports_network(self, network: Optional[str]) -> bool:
        return network in self.supported_networks


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    """Turn frozen schema fragments back into plain JSON-serializable data."""
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def build_operation_table(specs: Iterable[OperationSpec]) -> Mapping[str, OperationSpec]:
    """Index specs by id, rejecting duplicates within one family."""
    table: Dict[str, OperationSpec] = {}
    for spec in specs:
        if spec.operation_id in table:
            raise ValueError(f"Duplicate operation id: {spec.operation_id}")
        table[spec.operation_id] = spec
    return MappingProxyType(table)


def operation(
    operation_id: str,
    path_template: str,
    *,
    description: str,
    request_schema: Dict[str, Any],
    response_schema: Dict[str, Any],
    http_method: str = "POST",
    graphql_query: Optional[str] = None,
) -> OperationSpec:
    """Build an immutable ``OperationSpec`` from plain schema literals."""
    return OperationSpec(
        operation_id=operation_id,
        path_template=path_template,
        http_method=http_method,
        description=description,
        request_schema=_freeze(request_schema),
        response_schema=_freeze(response_schema),
        graphql_query=graphql_query,
    )

