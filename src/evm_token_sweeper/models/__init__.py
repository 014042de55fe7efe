"""Domain models."""

from evm_token_sweeper.models.monitor_state import MonitorState
from evm_token_sweeper.models.network import NetworkConfig
from evm_token_sweeper.models.sweep_result import SweepOutcome, SweepResult
from evm_token_sweeper.models.token import TokenDetails
from evm_token_sweeper.models.transfer_log import TransferLogEntry
from evm_token_sweeper.models.wallet import WalletIdentity

__all__ = [
    "MonitorState",
    "NetworkConfig",
    "SweepOutcome",
    "SweepResult",
    "TokenDetails",
    "TransferLogEntry",
    "WalletIdentity",
]
