"""Process-wide event bus (bubus) carrying monitor and sweep events."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Return the event bus shared by all network monitors. Created on first call."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus(
            name="EvmTokenSweeper",
            max_history_size=200,
            wal_path=None,
        )
    return _event_bus

