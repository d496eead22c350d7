"""Operation table for the Bitcoin-style indexing API (Nodit Bitcoin API)."""

from __future__ import annotations

from web3_mcp.operations.specs import BackendFamily, build_operation_table, operation

# Legacy, P2SH, Bech32 and Bech32m address formats.
BITCOIN_ADDRESS_PATTERN = (
    "^(1[a-km-zA-HJ-NP-Z1-9]{25,33}|3[a-km-zA-HJ-NP-Z1-9]{25,33}"
    "|bc1q[a-z0-9]{38,59}|bc1p[a-z0-9]{58})$"
)
BITCOIN_PROTOCOLS = ("bitcoin", "dogecoin")
BITCOIN_NETWORKS = ("mainnet", "testnet")

_ADDRESS = {"type": "string", "pattern": BITCOIN_ADDRESS_PATTERN}
_PAGINATION = {
    "page": {"type": "integer", "minimum": 1, "maximum": 100},
    "rpp": {"type": "integer", "minimum": 1, "maximum": 1000},
}


def _items_of(properties):
    return {
        "type": "object",
        "properties": {
            "items": {"type": "array", "items": {"type": "object", "properties": properties}}
        },
    }


_OPERATIONS = (
    operation(
        "getNativeTokenBalanceByAccount",
        "/{protocol}/{network}/native/getNativeTokenBalanceByAccount",
        description="Get Bitcoin balance for specific address",
        request_schema={
            "type": "object",
            "required": ["accountAddress"],
            "properties": {"accountAddress": _ADDRESS},
        },
        response_schema={
            "type": "object",
            "properties": {"ownerAddress": {"type": "string"}, "balance": {"type": "string"}},
        },
    ),
    operation(
        "getNativeTokenTransfersByAccount",
        "/{protocol}/{network}/native/getNativeTokenTransfersByAccount",
        description="Get Bitcoin transaction history for address",
        request_schema={
            "type": "object",
            "required": ["accountAddress"],
            "properties": {
                "accountAddress": _ADDRESS,
                **_PAGINATION,
                "withCount": {"type": "boolean", "default": False},
            },
        },
        response_schema=_items_of(
            {
                "from": {"type": "string"},
                "to": {"type": "string"},
                "value": {"type": "string"},
                "transactionId": {"type": "string"},
                "blockHeight": {"type": "integer"},
                "blockTimestamp": {"type": "integer"},
            }
        ),
    ),
    operation(
        "getUnspentTransactionOutputsByAccount",
        "/{protocol}/{network}/blockchain/getUnspentTransactionOutputsByAccount",
        description="Get UTXO list for Bitcoin address",
        request_schema={
            "type": "object",
            "required": ["accountAddress"],
            "properties": {
                "accountAddress": _ADDRESS,
                **_PAGINATION,
                "withCount": {"type": "boolean", "default": False},
            },
        },
        response_schema=_items_of(
            {
                "transactionId": {"type": "string"},
                "voutIndex": {"type": "integer"},
                "address": {"type": "string"},
                "value": {"type": "string"},
                "blockHeight": {"type": "integer"},
                "blockHash": {"type": "string"},
                "blockTimestamp": {"type": "integer"},
            }
        ),
    ),
    operation(
        "getTransactionByTransactionId",
        "/{protocol}/{network}/blockchain/getTransactionByTransactionId",
        description="Get Bitcoin transaction details by transaction ID",
        request_schema={
            "type": "object",
            "required": ["transactionId"],
            "properties": {"transactionId": {"type": "string"}},
        },
        response_schema={
            "type": "object",
            "properties": {
                "transactionId": {"type": "string"},
                "blockHeight": {"type": "integer"},
                "blockHash": {"type": "string"},
                "blockTimestamp": {"type": "integer"},
                "inputs": {"type": "array"},
                "outputs": {"type": "array"},
                "fee": {"type": "string"},
                "size": {"type": "integer"},
            },
        },
    ),
    operation(
        "getTransactionsByAccount",
        "/{protocol}/{network}/blockchain/getTransactionsByAccount",
        description="Get Bitcoin transactions for account",
        request_schema={
            "type": "object",
            "required": ["account"],
            "properties": {"account": _ADDRESS, **_PAGINATION},
        },
        response_schema=_items_of(
            {
                "transactionId": {"type": "string"},
                "blockHeight": {"type": "integer"},
                "blockTimestamp": {"type": "integer"},
            }
        ),
    ),
    operation(
        "getTotalTransactionCountByAccount",
        "/{protocol}/{network}/blockchain/getTotalTransactionCountByAccount",
        description="Get total transaction count for Bitcoin address",
        request_schema={
            "type": "object",
            "required": ["account"],
            "properties": {"account": _ADDRESS},
        },
        response_schema={"type": "object", "properties": {"count": {"type": "integer"}}},
    ),
    operation(
        "getBlockByHashOrNumber",
        "/{protocol}/{network}/blockchain/getBlockByHashOrNumber",
        description="Get Bitcoin block information",
        request_schema={
            "type": "object",
            "required": ["blockHashOrNumber"],
            "properties": {"blockHashOrNumber": {"type": "string"}},
        },
        response_schema={
            "type": "object",
            "properties": {
                "hash": {"type": "string"},
                "height": {"type": "integer"},
                "timestamp": {"type": "integer"},
                "transactionCount": {"type": "integer"},
                "size": {"type": "integer"},
                "difficulty": {"type": "string"},
            },
        },
    ),
)

BITCOIN_FAMILY = BackendFamily(
    name="bitcoin",
    operations=build_operation_table(_OPERATIONS),
    supported_protocols=BITCOIN_PROTOCOLS,
    supported_networks=BITCOIN_NETWORKS,
    executor_tool="call_nodit_api",
)
