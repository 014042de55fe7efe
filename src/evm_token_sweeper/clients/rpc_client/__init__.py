"""EVM JSON-RPC client and ERC-20 helpers."""

from evm_token_sweeper.clients.rpc_client.erc20 import (
    TRANSFER_TOPIC,
    Erc20Token,
    address_topic,
    encode_transfer,
)
from evm_token_sweeper.clients.rpc_client.rpc_client import RpcClient, hex_to_int

__all__ = [
    "TRANSFER_TOPIC",
    "Erc20Token",
    "RpcClient",
    "address_topic",
    "encode_transfer",
    "hex_to_int",
]
