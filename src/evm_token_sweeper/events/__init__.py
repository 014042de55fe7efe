# -*- coding: utf-8 -*-
"""Event bus and event types."""

from evm_token_sweeper.events.bus import get_event_bus
from evm_token_sweeper.events.sweeps import (
    MonitorFailedEvent,
    MonitorStartedEvent,
    TokenSweepFailedEvent,
    TokenSweptEvent,
    TransferDetectedEvent,
)

__all__ = [
    "get_event_bus",
    "MonitorFailedEvent",
    "MonitorStartedEvent",
    "TokenSweepFailedEvent",
    "TokenSweptEvent",
    "TransferDetectedEvent",
]
