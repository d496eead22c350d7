import pytest

from web3_mcp.operations import (
    FAMILIES,
    UnknownBackendFamilyError,
    UnknownOperationError,
    get_family,
    get_spec,
    list_families,
    list_operations,
)
from web3_mcp.operations.specs import build_operation_table, operation


def test_three_independent_families():
    assert list_families() == ["evm", "bitcoin", "aptos"]
    evm_ids = set(list_operations("evm"))
    bitcoin_ids = set(list_operations("bitcoin"))
    aptos_ids = set(list_operations("aptos"))
    assert len(evm_ids) == 7
    assert len(bitcoin_ids) == 7
    assert len(aptos_ids) == 6
    assert not evm_ids & bitcoin_ids
    assert not evm_ids & aptos_ids


def test_operations_listed_in_registration_order():
    assert list_operations("evm")[:2] == [
        "searchTokenContractMetadataByKeyword",
        "getTokenPricesByContracts",
    ]
    assert list_operations("aptos")[0] == "coin_activities"


def test_get_spec_returns_path_template():
    spec = get_spec("evm", "getGasPrice")
    assert "{protocol}" in spec.path_template
    assert "{network}" in spec.path_template
    assert spec.resolve_path("polygon", "amoy").startswith("/polygon/amoy/")


def test_get_spec_unknown_operation_lists_valid_ids():
    with pytest.raises(UnknownOperationError) as excinfo:
        get_spec("bitcoin", "getGasPrice")
    assert excinfo.value.code == "UnknownOperation"
    assert excinfo.value.available == list_operations("bitcoin")


def test_get_family_unknown_name():
    with pytest.raises(UnknownBackendFamilyError) as excinfo:
        get_family("solana")
    assert excinfo.value.available == ["evm", "bitcoin", "aptos"]


def test_get_family_is_case_insensitive():
    assert get_family(" EVM ").name == "evm"


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        FAMILIES["solana"] = FAMILIES["evm"]  # type: ignore[index]
    spec = get_spec("evm", "getTokenPricesByContracts")
    with pytest.raises(TypeError):
        spec.request_schema["required"] = []  # type: ignore[index]


def test_aptos_specs_carry_graphql_document():
    spec = get_spec("aptos", "current_coin_balances")
    assert spec.http_method == "POST"
    assert spec.path_template == "/{protocol}/{network}/graphql"
    assert spec.graphql_query and "current_coin_balances" in spec.graphql_query
    assert spec.request_schema["required"] == ("address",)


def test_duplicate_operation_ids_rejected():
    spec = operation("op", "/{protocol}/{network}/x", description="x", request_schema={}, response_schema={})
    with pytest.raises(ValueError):
        build_operation_table([spec, spec])


def test_every_family_defaults_to_mainnet():
    for family in FAMILIES.values():
        assert family.default_network == "mainnet"
        assert "mainnet" in family.supported_networks
