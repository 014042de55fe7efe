"""Custom exceptions for configuration, JSON-RPC transport and network monitors."""

from __future__ import annotations


class SweeperError(Exception):
    """Base exception for token-sweeper errors."""

    pass


class ConfigurationError(SweeperError):
    """Raised when the process configuration cannot be used. Fatal for the whole process."""

    pass


class MissingRequiredConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration: {key}")
        self.key = key


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is present but malformed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid configuration {key}: {reason}")
        self.key = key
        self.reason = reason


class RpcError(SweeperError):
    """Raised when a JSON-RPC call returns an error object or an unusable result."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        code: int | None = None,
        data: object | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.code = code
        self.data = data


class RpcTransportError(RpcError):
    """Raised when the HTTP request carrying a JSON-RPC call fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class ReceiptTimeoutError(RpcError):
    """Raised when a transaction receipt does not appear within the configured timeout."""

    def __init__(self, tx_hash: str, timeout_seconds: float) -> None:
        super().__init__(
            f"No receipt for {tx_hash} after {timeout_seconds:g}s",
            method="eth_getTransactionReceipt",
        )
        self.tx_hash = tx_hash
        self.timeout_seconds = timeout_seconds


class TransactionRevertedError(SweeperError):
    """Raised when a mined transaction has receipt status 0."""

    def __init__(self, tx_hash: str, block_number: int | None = None) -> None:
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
        self.block_number = block_number


class MonitorError(SweeperError):
    """Base exception for errors raised inside a network monitor."""

    def __init__(self, network: str, message: str) -> None:
        super().__init__(f"[{network}] {message}")
        self.network = network


class TransientMonitorError(MonitorError):
    """Error that only costs the current tick; the monitor keeps running."""

    pass


class PollingError(TransientMonitorError):
    """Raised when a polling tick cannot read the block height or the transfer logs."""

    pass


class FatalMonitorError(MonitorError):
    """Error that ends the current monitor session.

    ``restartable`` tells the monitor whether to start a fresh session after the
    restart delay or to stop for good.
    """

    restartable: bool = True


class StartupError(FatalMonitorError):
    """Raised when connecting, reading the initial block or the startup sweep fails."""

    restartable = True


class InvalidPrivateKeyError(FatalMonitorError):
    """Raised when no wallet can be derived from the configured private key. Never retried."""

    restartable = False
