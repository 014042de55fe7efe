"""Monitor and sweep events."""

from evm_token_sweeper.events.sweeps.sweep_events import (
    MonitorFailedEvent,
    MonitorStartedEvent,
    TokenSweepFailedEvent,
    TokenSweptEvent,
    TransferDetectedEvent,
)

__all__ = [
    "MonitorFailedEvent",
    "MonitorStartedEvent",
    "TokenSweepFailedEvent",
    "TokenSweptEvent",
    "TransferDetectedEvent",
]
