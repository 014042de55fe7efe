"""HTTP and JSON-RPC clients."""

from evm_token_sweeper.clients.http import AsyncHttpClient
from evm_token_sweeper.clients.rpc_client import Erc20Token, RpcClient

__all__ = [
    "AsyncHttpClient",
    "Erc20Token",
    "RpcClient",
]
