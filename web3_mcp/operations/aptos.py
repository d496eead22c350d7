"""
Query table for the Aptos GraphQL indexer.

Every entry is a GraphQL document posted to the same endpoint. The request
schema describes the query variables; the dispatcher wraps the caller's body as
``{"query": ..., "variables": ...}``.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from web3_mcp.operations.specs import BackendFamily, build_operation_table, operation

APTOS_PROTOCOLS = ("aptos",)
APTOS_NETWORKS = ("mainnet", "testnet")
APTOS_GRAPHQL_PATH = "/{protocol}/{network}/graphql"

# GraphQL scalar -> JSON schema type
_SCALAR_TYPES = {
    "String": "string",
    "Int": "integer",
    "timestamp": "string",
    "[String!]": "array",
}


def _variables_schema(*variables: Tuple[str, str, bool, Any]) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    required = []
    for name, graphql_type, is_required, default in variables:
        prop: Dict[str, Any] = {"type": _SCALAR_TYPES[graphql_type], "graphqlType": graphql_type}
        if graphql_type == "[String!]":
            prop["items"] = {"type": "string"}
        if default is not None:
            prop["default"] = default
        properties[name] = prop
        if is_required:
            required.append(name)
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _rows_of(root: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "data": {
                "type": "object",
                "properties": {root: {"type": "array", "items": {"type": "object"}}},
            }
        },
    }


COIN_ACTIVITIES_QUERY = """
query GetCoinActivities($address: String, $coin_type: String, $limit: Int, $activity_types: [String!], $start_time: timestamp) {
  coin_activities(
    where: {
      owner_address: {_eq: $address}
      coin_type: {_eq: $coin_type}
      activity_type: {_in: $activity_types}
      transaction_timestamp: {_gte: $start_time}
    }
    limit: $limit
    order_by: {transaction_timestamp: desc}
  ) {
    activity_type
    amount
    block_height
    coin_type
    entry_function_id_str
    event_account_address
    is_gas_fee
    is_transaction_success
    owner_address
    storage_refund_amount
    transaction_timestamp
    transaction_version
    coin_info { name symbol decimals supply_aggregator_table_handle creator_address }
  }
}
""".strip()

CURRENT_COIN_BALANCES_QUERY = """
query GetCurrentCoinBalances($address: String, $coin_types: [String!]) {
  current_coin_balances(
    where: {
      owner_address: {_eq: $address}
      coin_type: {_in: $coin_types}
      amount: {_gt: "0"}
    }
  ) {
    amount
    coin_type
    coin_type_hash
    last_transaction_timestamp
    last_transaction_version
    owner_address
    coin_info { name symbol decimals creator_address supply_aggregator_table_handle }
  }
}
""".strip()

COIN_INFOS_QUERY = """
query GetCoinInfos($coin_types: [String!], $creator_address: String) {
  coin_infos(
    where: {
      coin_type: {_in: $coin_types}
      creator_address: {_eq: $creator_address}
    }
  ) {
    coin_type
    name
    symbol
    decimals
    creator_address
    supply_aggregator_table_handle
  }
}
""".strip()

LIQUIDITY_ACTIVITIES_QUERY = """
query GetLiquidityActivities($pool_address: String, $coin_types: [String!], $limit: Int, $start_time: timestamp) {
  coin_activities(
    where: {
      event_account_address: {_eq: $pool_address}
      coin_type: {_in: $coin_types}
      activity_type: {_in: ["0x1::coin::DepositEvent", "0x1::coin::WithdrawEvent"]}
      transaction_timestamp: {_gte: $start_time}
    }
    limit: $limit
    order_by: {transaction_timestamp: desc}
  ) {
    activity_type
    amount
    block_height
    coin_type
    entry_function_id_str
    event_account_address
    owner_address
    transaction_timestamp
    transaction_version
    coin_info { name symbol decimals }
  }
}
""".strip()

PROTOCOL_ACTIVITIES_QUERY = """
query GetProtocolActivities($protocol_address: String, $user_address: String, $function_filter: [String!], $start_time: timestamp, $limit: Int) {
  coin_activities(
    where: {
      event_account_address: {_eq: $protocol_address}
      owner_address: {_eq: $user_address}
      entry_function_id_str: {_in: $function_filter}
      transaction_timestamp: {_gte: $start_time}
    }
    limit: $limit
    order_by: {transaction_timestamp: desc}
  ) {
    activity_type
    amount
    block_height
    coin_type
    entry_function_id_str
    event_account_address
    is_gas_fee
    is_transaction_success
    owner_address
    transaction_timestamp
    transaction_version
    coin_info { name symbol decimals }
  }
}
""".strip()

TOKEN_ACTIVITIES_QUERY = """
query GetTokenActivities($address: String, $token_data_id: String, $limit: Int, $start_time: timestamp) {
  token_activities(
    where: {
      from_address: {_eq: $address}
      to_address: {_eq: $address}
      token_data_id_hash: {_eq: $token_data_id}
      transaction_timestamp: {_gte: $start_time}
    }
    limit: $limit
    order_by: {transaction_timestamp: desc}
  ) {
    transaction_version
    event_account_address
    event_creation_number
    event_sequence_number
    collection_data_id_hash
    token_data_id_hash
    property_version
    transfer_type
    from_address
    to_address
    token_amount
    transaction_timestamp
    coin_type
    coin_amount
  }
}
""".strip()

_OPERATIONS = (
    operation(
        "coin_activities",
        APTOS_GRAPHQL_PATH,
        description="Get coin activities for addresses or contracts",
        graphql_query=COIN_ACTIVITIES_QUERY,
        request_schema=_variables_schema(
            ("address", "String", False, None),
            ("coin_type", "String", False, None),
            ("limit", "Int", False, 100),
            ("activity_types", "[String!]", False, None),
            ("start_time", "timestamp", False, None),
        ),
        response_schema=_rows_of("coin_activities"),
    ),
    operation(
        "current_coin_balances",
        APTOS_GRAPHQL_PATH,
        description="Get current coin balances for addresses",
        graphql_query=CURRENT_COIN_BALANCES_QUERY,
        request_schema=_variables_schema(
            ("address", "String", True, None),
            ("coin_types", "[String!]", False, None),
        ),
        response_schema=_rows_of("current_coin_balances"),
    ),
    operation(
        "coin_infos",
        APTOS_GRAPHQL_PATH,
        description="Get coin metadata and information",
        graphql_query=COIN_INFOS_QUERY,
        request_schema=_variables_schema(
            ("coin_types", "[String!]", False, None),
            ("creator_address", "String", False, None),
        ),
        response_schema=_rows_of("coin_infos"),
    ),
    operation(
        "liquidity_activities",
        APTOS_GRAPHQL_PATH,
        description="Get liquidity pool activities (deposits/withdrawals)",
        graphql_query=LIQUIDITY_ACTIVITIES_QUERY,
        request_schema=_variables_schema(
            ("pool_address", "String", False, None),
            ("coin_types", "[String!]", False, None),
            ("limit", "Int", False, 100),
            ("start_time", "timestamp", False, None),
        ),
        response_schema=_rows_of("coin_activities"),
    ),
    operation(
        "protocol_activities",
        APTOS_GRAPHQL_PATH,
        description="Get DeFi protocol specific activities",
        graphql_query=PROTOCOL_ACTIVITIES_QUERY,
        request_schema=_variables_schema(
            ("protocol_address", "String", True, None),
            ("user_address", "String", False, None),
            ("function_filter", "[String!]", False, None),
            ("start_time", "timestamp", False, None),
            ("limit", "Int", False, 1000),
        ),
        response_schema=_rows_of("coin_activities"),
    ),
    operation(
        "token_activities",
        APTOS_GRAPHQL_PATH,
        description="Get token (NFT) activities on Aptos",
        graphql_query=TOKEN_ACTIVITIES_QUERY,
        request_schema=_variables_schema(
            ("address", "String", False, None),
            ("token_data_id", "String", False, None),
            ("limit", "Int", False, 100),
            ("start_time", "timestamp", False, None),
        ),
        response_schema=_rows_of("token_activities"),
    ),
)

APTOS_FAMILY = BackendFamily(
    name="aptos",
    operations=build_operation_table(_OPERATIONS),
    supported_protocols=APTOS_PROTOCOLS,
    supported_networks=APTOS_NETWORKS,
    executor_tool="call_nodit_aptos_indexer_api",
)
