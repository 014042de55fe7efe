"""Exceptions subpackage."""

from evm_token_sweeper.exceptions.exceptions import (
    ConfigurationError,
    FatalMonitorError,
    InvalidConfigError,
    InvalidPrivateKeyError,
    MissingRequiredConfigError,
    MonitorError,
    PollingError,
    ReceiptTimeoutError,
    RpcError,
    RpcTransportError,
    StartupError,
    SweeperError,
    TransactionRevertedError,
    TransientMonitorError,
)

__all__ = [
    "ConfigurationError",
    "FatalMonitorError",
    "InvalidConfigError",
    "InvalidPrivateKeyError",
    "MissingRequiredConfigError",
    "MonitorError",
    "PollingError",
    "ReceiptTimeoutError",
    "RpcError",
    "RpcTransportError",
    "StartupError",
    "SweeperError",
    "TransactionRevertedError",
    "TransientMonitorError",
]
