"""EVM token sweeper: per-network ERC-20 transfer monitors that forward balances to a recipient."""

from evm_token_sweeper.clients import AsyncHttpClient, Erc20Token, RpcClient
from evm_token_sweeper.config import get_settings
from evm_token_sweeper.DI import Container
from evm_token_sweeper.services import NetworkMonitor

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "Erc20Token",
    "NetworkMonitor",
    "RpcClient",
    "get_settings",
]
