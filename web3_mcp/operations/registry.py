"""
Lookup API over the per-family operation tables.

Three independent registries exist, one per backend family. Operation ids are
never shared across families, so every lookup names its family.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from web3_mcp.operations.aptos import APTOS_FAMILY
from web3_mcp.operations.bitcoin import BITCOIN_FAMILY
from web3_mcp.operations.evm import EVM_FAMILY
from web3_mcp.operations.specs import (
    BackendFamily,
    OperationSpec,
    UnknownBackendFamilyError,
    UnknownOperationError,
)

FAMILIES: Mapping[str, BackendFamily] = MappingProxyType(
    {family.name: family for family in (EVM_FAMILY, BITCOIN_FAMILY, APTOS_FAMILY)}
)


def list_families() -> List[str]:
    return list(FAMILIES.keys())


def get_family(name: str) -> BackendFamily:
    key = name.strip().lower() if isinstance(name, str) else name
    family = FAMILIES.get(key)
    if family is None:
        raise UnknownBackendFamilyError(str(name), list_families())
    return family


def list_operations(family: str) -> List[str]:
    return get_family(family).operation_ids()


def get_spec(family: str, operation_id: str) -> OperationSpec:
    """
    Look up one operation within one backend family.

    Raises:
        UnknownBackendFamilyError: if ``family`` is not registered.
        UnknownOperationError: if the id is not in that family's table. The
            exception carries every valid id for the family.
    """
    backend = get_family(family)
    spec = backend.operations.get(operation_id)
    if spec is None:
        raise UnknownOperationError(backend.name, str(operation_id), backend.operation_ids())
    return spec
