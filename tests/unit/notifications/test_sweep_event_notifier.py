# -*- coding: utf-8 -*-
"""Unit tests for SweepEventNotifier."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import MagicMock

from bubus import EventBus  # type: ignore[import-untyped]

from evm_token_sweeper.events.sweeps import (
    MonitorFailedEvent,
    TokenSweepFailedEvent,
    TokenSweptEvent,
    TransferDetectedEvent,
)
from evm_token_sweeper.services.notifications import SweepEventNotifier


def _notifier(bus: Any = None) -> tuple[SweepEventNotifier, SimpleNamespace, Any]:
    service = SimpleNamespace(notify=MagicMock())
    bus = bus or SimpleNamespace(on=MagicMock(), handlers={})
    return SweepEventNotifier(cast(Any, service), bus), service, bus


def _sent(service: SimpleNamespace) -> Any:
    return service.notify.call_args.args[0]


def test_start_subscribes_every_event_type() -> None:
    notifier, _, bus = _notifier()

    notifier.start()

    subscribed = {c.args[0] for c in bus.on.call_args_list}
    assert TokenSweptEvent in subscribed
    assert TokenSweepFailedEvent in subscribed
    assert TransferDetectedEvent in subscribed
    assert MonitorFailedEvent in subscribed


async def test_stop_unsubscribes_from_real_bus(event_bus: EventBus) -> None:
    notifier, _, _ = _notifier(event_bus)

    notifier.start()
    notifier.stop()

    remaining = event_bus.handlers.get(TokenSweptEvent.__name__, [])
    assert notifier._on_token_swept not in remaining


def test_token_swept_message() -> None:
    notifier, service, _ = _notifier()

    notifier._on_token_swept(
        TokenSweptEvent(
            network="Base",
            token_address="0xtoken",
            token_symbol="USDC",
            token_name="USD Coin",
            amount="0.001",
            amount_raw="1000",
            recipient_address="0xrecipient",
            transaction_hash="0xhash",
        )
    )

    message = _sent(service)
    assert message.event_type == "token_swept"
    assert message.message == "[Base] Transferred 0.001 USDC"
    assert message.payload["token"] == "USDC (USD Coin)"
    assert message.payload["transaction_hash"] == "0xhash"


def test_monitor_failed_message_with_restart() -> None:
    notifier, service, _ = _notifier()

    notifier._on_monitor_failed(
        MonitorFailedEvent(
            network="Arbitrum",
            error_type="StartupError",
            error_message="[Arbitrum] connection refused",
            will_restart=True,
            restart_delay_seconds=30.0,
        )
    )

    message = _sent(service)
    assert message.message == "[Arbitrum] Fatal error, restarting"
    assert message.payload["restart_in"] == "30s"


def test_sweep_failed_message() -> None:
    notifier, service, _ = _notifier()

    notifier._on_sweep_failed(
        TokenSweepFailedEvent(
            network="Polygon",
            token_address="0xtoken",
            token_symbol="UNKNOWN",
            error_message="execution reverted",
        )
    )

    message = _sent(service)
    assert message.event_type == "sweep_failed"
    assert message.payload["error"] == "execution reverted"
