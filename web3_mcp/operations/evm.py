"""Operation table for the EVM-style indexing API (Nodit web3 data API)."""

from __future__ import annotations

from web3_mcp.operations.specs import BackendFamily, build_operation_table, operation

EVM_ADDRESS_PATTERN = "^0[xX][0-9a-fA-F]{40}$"
EVM_PROTOCOLS = ("ethereum", "polygon", "arbitrum", "base", "optimism")
EVM_NETWORKS = ("mainnet", "sepolia", "amoy")

SEARCH_TOKEN_BY_KEYWORD = "searchTokenContractMetadataByKeyword"
GET_TOKEN_PRICES_BY_CONTRACTS = "getTokenPricesByContracts"

_PAGINATION = {
    "page": {"type": "integer", "minimum": 1, "maximum": 100},
    "rpp": {"type": "integer", "minimum": 1, "maximum": 1000},
}

_CONTRACT_SUMMARY = {
    "type": "object",
    "properties": {
        "address": {"type": "string"},
        "name": {"type": "string"},
        "symbol": {"type": "string"},
        "decimals": {"type": "integer"},
    },
}

_OPERATIONS = (
    operation(
        SEARCH_TOKEN_BY_KEYWORD,
        "/{protocol}/{network}/token/searchTokenContractMetadataByKeyword",
        description="Search token contracts by keyword (name or symbol)",
        request_schema={
            "type": "object",
            "required": ["keyword"],
            "properties": {
                "keyword": {"type": "string"},
                **_PAGINATION,
                "cursor": {"type": "string"},
                "withCount": {"type": "boolean", "default": False},
            },
        },
        response_schema={
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "address": {"type": "string"},
                            "name": {"type": "string"},
                            "symbol": {"type": "string"},
                            "decimals": {"type": "integer"},
                            "totalSupply": {"type": "string"},
                            "type": {"type": "string"},
                        },
                    },
                }
            },
        },
    ),
    operation(
        GET_TOKEN_PRICES_BY_CONTRACTS,
        "/{protocol}/{network}/token/getTokenPricesByContracts",
        description="Get token prices for contract addresses",
        request_schema={
            "type": "object",
            "required": ["contractAddresses"],
            "properties": {
                "contractAddresses": {
                    "type": "array",
                    "items": {"type": "string", "pattern": EVM_ADDRESS_PATTERN},
                    "maxItems": 100,
                },
                "currency": {"type": "string", "default": "USD"},
            },
        },
        response_schema={
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "currency": {"type": "string"},
                    "price": {"type": "string"},
                    "volumeFor24h": {"type": "string"},
                    "percentChangeFor24h": {"type": "string"},
                    "marketCap": {"type": "string"},
                    "contract": _CONTRACT_SUMMARY,
                },
            },
        },
    ),
    operation(
        "getTokenTransfersByAccount",
        "/{protocol}/{network}/token/getTokenTransfersByAccount",
        description="Get token transfers for account address",
        request_schema={
            "type": "object",
            "required": ["accountAddress"],
            "properties": {
                "accountAddress": {"type": "string", "pattern": EVM_ADDRESS_PATTERN},
                "relation": {"type": "string", "enum": ["from", "to", "both"], "default": "both"},
                "contractAddresses": {
                    "type": "array",
                    "items": {"type": "string", "pattern": EVM_ADDRESS_PATTERN},
                },
                "fromDate": {"type": "string", "format": "date-time"},
                "toDate": {"type": "string", "format": "date-time"},
                **_PAGINATION,
                "withZeroValue": {"type": "boolean", "default": False},
            },
        },
        response_schema={
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "from": {"type": "string"},
                            "to": {"type": "string"},
                            "value": {"type": "string"},
                            "timestamp": {"type": "integer"},
                            "blockNumber": {"type": "integer"},
                            "transactionHash": {"type": "string"},
                            "contract": _CONTRACT_SUMMARY,
                        },
                    },
                }
            },
        },
    ),
    operation(
        "getTokensOwnedByAccount",
        "/{protocol}/{network}/token/getTokensOwnedByAccount",
        description="Get tokens owned by account",
        request_schema={
            "type": "object",
            "required": ["account"],
            "properties": {
                "account": {"type": "string", "pattern": EVM_ADDRESS_PATTERN},
                **_PAGINATION,
            },
        },
        response_schema={
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "balance": {"type": "string"},
                            "contract": _CONTRACT_SUMMARY,
                        },
                    },
                }
            },
        },
    ),
    operation(
        "getNativeBalanceByAccount",
        "/{protocol}/{network}/native/getNativeBalanceByAccount",
        description="Get native token balance for account",
        request_schema={
            "type": "object",
            "required": ["account"],
            "properties": {"account": {"type": "string", "pattern": EVM_ADDRESS_PATTERN}},
        },
        response_schema={"type": "object", "properties": {"balance": {"type": "string"}}},
    ),
    operation(
        "getGasPrice",
        "/{protocol}/{network}/block/getGasPrice",
        description="Get current gas price",
        request_schema={"type": "object", "properties": {}},
        response_schema={"type": "object", "properties": {"gasPrice": {"type": "string"}}},
    ),
    operation(
        "getBlocksWithinRange",
        "/{protocol}/{network}/blockchain/getBlocksWithinRange",
        description="Get blocks within a specific range",
        request_schema={
            "type": "object",
            "properties": {
                "fromBlock": {"type": "string"},
                "toBlock": {"type": "string"},
                "fromDate": {"type": "string", "format": "date-time"},
                "toDate": {"type": "string", "format": "date-time"},
                **_PAGINATION,
                "cursor": {"type": "string"},
                "withCount": {"type": "boolean", "default": False},
            },
        },
        response_schema={
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "hash": {"type": "string"},
                            "number": {"type": "integer"},
                            "timestamp": {"type": "integer"},
                            "parentHash": {"type": "string"},
                            "miner": {"type": "string"},
                            "gasLimit": {"type": "string"},
                            "gasUsed": {"type": "string"},
                            "transactionCount": {"type": "integer"},
                            "transactions": {"type": "array", "items": {"type": "string"}},
                        },
                    },
                }
            },
        },
    ),
)

EVM_FAMILY = BackendFamily(
    name="evm",
    operations=build_operation_table(_OPERATIONS),
    supported_protocols=EVM_PROTOCOLS,
    supported_networks=EVM_NETWORKS,
    executor_tool="call_nodit_api",
)
