"""Static operation registries and the capability dispatcher."""

from .specs import (
    BackendFamily,
    OperationSpec,
    RegistryError,
    UnknownBackendFamilyError,
    UnknownOperationError,
    UnsupportedProtocolError,
)
from .registry import FAMILIES, get_family, get_spec, list_families, list_operations
from .dispatcher import CallDescriptor, dispatch, plan_call

__all__ = [
    "BackendFamily",
    "OperationSpec",
    "RegistryError",
    "UnknownBackendFamilyError",
    "UnknownOperationError",
    "UnsupportedProtocolError",
    "FAMILIES",
    "get_family",
    "get_spec",
    "list_families",
    "list_operations",
    "CallDescriptor",
    "dispatch",
    "plan_call",
]
