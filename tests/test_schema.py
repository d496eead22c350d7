from web3_mcp.operations import get_spec
from web3_mcp.operations.schema import validate_request_body


def test_valid_body_has_no_errors():
    schema = get_spec("evm", "searchTokenContractMetadataByKeyword").request_schema
    assert validate_request_body(schema, {"keyword": "USDC", "page": 1, "rpp": 20}) == []


def test_type_and_range_errors():
    schema = get_spec("evm", "searchTokenContractMetadataByKeyword").request_schema
    errors = validate_request_body(schema, {"keyword": 5, "rpp": 0})
    assert "requestBody.keyword: expected string" in errors
    assert "requestBody.rpp: must be >= 1" in errors


def test_boolean_is_not_an_integer():
    schema = {"type": "object", "properties": {"page": {"type": "integer"}}}
    assert validate_request_body(schema, {"page": True}) == ["requestBody.page: expected integer"]


def test_array_items_pattern_checked():
    schema = get_spec("evm", "getTokenPricesByContracts").request_schema
    errors = validate_request_body(
        schema,
        {"contractAddresses": ["0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", "not-an-address"]},
    )
    assert len(errors) == 1
    assert errors[0].startswith("requestBody.contractAddresses[1]")


def test_max_items_and_enum():
    schema = {
        "type": "object",
        "properties": {
            "ids": {"type": "array", "maxItems": 2},
            "order": {"type": "string", "enum": ["asc", "desc"]},
        },
    }
    errors = validate_request_body(schema, {"ids": [1, 2, 3], "order": "up"})
    assert "requestBody.ids: at most 2 items allowed" in errors
    assert "requestBody.order: must be one of asc, desc" in errors


def test_non_object_body():
    schema = get_spec("bitcoin", "getNativeTokenBalanceByAccount").request_schema
    assert validate_request_body(schema, ["x"]) == ["requestBody: expected object"]
