"""Monitor and sweep events (emitted by NetworkMonitor, IncomingTransferHandler and SweepExecutor).

Handled by SweepEventNotifier to send notifications.
"""

from __future__ import annotations

from bubus import BaseEvent  # type: ignore[import-untyped]


class MonitorStartedEvent(BaseEvent[None]):
    """Emitted when a network monitor finished startup and begins polling."""

    network: str
    wallet_address: str
    recipient_address: str
    from_block: int
    custom_tokens_count: int = 0


class MonitorFailedEvent(BaseEvent[None]):
    """Emitted when a monitor session fails during startup."""

    network: str
    error_type: str
    error_message: str
    will_restart: bool
    """False only for the terminal (malformed private key) case."""
    restart_delay_seconds: float | None = None


class TransferDetectedEvent(BaseEvent[None]):
    """Emitted when a new inbound Transfer log is accepted for sweeping."""

    network: str
    transaction_hash: str
    token_address: str
    token_symbol: str
    token_name: str
    block_number: int
    amount: str | None = None
    """Transferred amount formatted with the token decimals, if decodable."""


class TokenSweptEvent(BaseEvent[None]):
    """Emitted when a sweep transfer has been confirmed on chain."""

    network: str
    token_address: str
    token_symbol: str
    token_name: str
    amount: str
    amount_raw: str
    recipient_address: str
    transaction_hash: str


class TokenSweepFailedEvent(BaseEvent[None]):
    """Emitted when reading the balance, submitting or confirming a sweep fails."""

    network: str
    token_address: str
    token_symbol: str
    error_message: str
    transaction_hash: str | None = None
