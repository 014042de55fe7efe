"""NotificationService: queued fan-out of NotificationMessage to every enabled channel."""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from evm_token_sweeper.notifications.strategies import BaseNotificationStrategy
from evm_token_sweeper.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Deliver notifications from a single background worker.

    notify() never blocks a monitor: messages are queued (dropped when the
    queue is full) and a failing channel is logged without affecting the
    others. shutdown() delivers what is queued, waiting at most
    drain_timeout_seconds.
    """

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 1000
    drain_timeout_seconds: float = 30.0
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker: asyncio.Task[None] | None = field(init=False, default=None)
    _delivered: Counter[str] = field(init=False, default_factory=Counter)
    _failed: Counter[str] = field(init=False, default_factory=Counter)
    _dropped: int = field(init=False, default=0)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def dropped(self) -> int:
        """Messages discarded because the queue was full."""
        return self._dropped

    def stats(self) -> dict[str, dict[str, int]]:
        """Delivered and failed message counts per channel class name."""
        return {
            channel: {"delivered": self._delivered[channel], "failed": self._failed[channel]}
            for channel in (type(n).__name__ for n in self.notifiers)
        }

    async def initialize(self) -> None:
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        self._queue = asyncio.Queue(maxsize=self.queue_size)
        self._worker = asyncio.create_task(self._drain_queue(self._queue), name="notification-worker")
        self._logger.debug(
            "notification_init_complete",
            notification_channels=[type(n).__name__ for n in self.notifiers],
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        queue, worker = self._queue, self._worker
        self._queue = self._worker = None
        if queue is not None and worker is not None:
            queue.shutdown()
            try:
                await asyncio.wait_for(queue.join(), timeout=self.drain_timeout_seconds)
            except TimeoutError:
                self._logger.warning(
                    "notification_drain_timed_out",
                    notification_pending=queue.qsize(),
                )
                worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug(
            "notification_shutdown_complete",
            notification_dropped=self._dropped,
            notification_stats=self.stats(),
        )

    def notify(self, message: NotificationMessage) -> None:
        """Queue a message for every channel. Raises RuntimeError if called before initialize()."""
        queue = self._queue
        if queue is None:
            if not self.notifiers:
                return
            raise RuntimeError("NotificationService not initialized")
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            self._dropped += 1
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )
        except asyncio.QueueShutDown:
            self._logger.debug(
                "notification_after_shutdown_dropped",
                notification_event_type=message.event_type,
            )

    async def _drain_queue(self, queue: asyncio.Queue[NotificationMessage]) -> None:
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                return
            try:
                for notifier in self.notifiers:
                    await self._deliver(notifier, message)
            finally:
                queue.task_done()

    async def _deliver(self, notifier: BaseNotificationStrategy, message: NotificationMessage) -> None:
        channel = type(notifier).__name__
        try:
            await notifier.send_notification(message)
        except Exception as e:
            self._failed[channel] += 1
            self._logger.warning(
                "notification_channel_failed",
                notification_event_type=message.event_type,
                notification_channel=channel,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        else:
            self._delivered[channel] += 1
