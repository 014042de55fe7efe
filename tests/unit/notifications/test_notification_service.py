# -*- coding: utf-8 -*-
"""Unit tests for NotificationService and ConsoleNotifier."""

from __future__ import annotations

import io
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from evm_token_sweeper.notifications.notification_manager import NotificationService
from evm_token_sweeper.notifications.strategies.console import ConsoleNotifier
from evm_token_sweeper.notifications.stylers.notification_styler import EventNotificationStyler
from evm_token_sweeper.notifications.types import NotificationMessage


def _channel(**overrides: Any) -> Any:
    channel = SimpleNamespace(
        initialize=AsyncMock(),
        shutdown=AsyncMock(),
        send_notification=AsyncMock(),
    )
    for key, value in overrides.items():
        setattr(channel, key, value)
    return channel


async def test_messages_reach_every_channel_before_shutdown_returns() -> None:
    first, second = _channel(), _channel()
    service = NotificationService(notifiers=[first, second])
    message = NotificationMessage(event_type="token_swept", message="done")

    await service.initialize()
    service.notify(message)
    await service.shutdown()

    first.send_notification.assert_awaited_once_with(message)
    second.send_notification.assert_awaited_once_with(message)
    first.shutdown.assert_awaited_once()


async def test_failing_channel_does_not_block_others() -> None:
    broken = _channel(send_notification=AsyncMock(side_effect=RuntimeError("down")))
    healthy = _channel()
    service = NotificationService(notifiers=[broken, healthy])

    await service.initialize()
    service.notify(NotificationMessage(event_type="sweep_failed", message="x"))
    await service.shutdown()

    healthy.send_notification.assert_awaited_once()


async def test_notify_without_channels_is_a_no_op() -> None:
    service = NotificationService(notifiers=[])

    await service.initialize()
    service.notify(NotificationMessage(event_type="token_swept", message="x"))
    await service.shutdown()


async def test_notify_before_initialize_raises() -> None:
    service = NotificationService(notifiers=[_channel()])

    with pytest.raises(RuntimeError):
        service.notify(NotificationMessage(event_type="token_swept", message="x"))


async def test_full_queue_drops_and_counts() -> None:
    service = NotificationService(notifiers=[_channel()], queue_size=1)
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="1"))
    service.notify(NotificationMessage(event_type="b", message="2"))

    assert service.dropped == 1
    await service.shutdown()


async def test_console_notifier_prints_plain_text() -> None:
    stream = io.StringIO()
    settings = SimpleNamespace(console=SimpleNamespace(enabled=True))
    notifier = ConsoleNotifier(cast(Any, settings), EventNotificationStyler(), stream=stream)

    await notifier.initialize()
    await notifier.send_notification(
        NotificationMessage(event_type="token_swept", message="[Base] Transferred 1.0 DAI")
    )

    assert "[Base] Transferred 1.0 DAI" in stream.getvalue()
    assert "<b>" not in stream.getvalue()
