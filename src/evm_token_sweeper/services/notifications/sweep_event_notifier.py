# -*- coding: utf-8 -*-
"""SweepEventNotifier: listens to monitor/sweep events and sends notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from evm_token_sweeper.events.sweeps import (
    MonitorFailedEvent,
    MonitorStartedEvent,
    TokenSweepFailedEvent,
    TokenSweptEvent,
    TransferDetectedEvent,
)
from evm_token_sweeper.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from evm_token_sweeper.notifications.notification_manager import NotificationService


def _token_label(symbol: str, name: str | None = None) -> str:
    return f"{symbol} ({name})" if name else symbol


class SweepEventNotifier:
    """Subscribes to monitor and sweep events and forwards them to NotificationService."""

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._handlers: list[tuple[type[Any], Callable[[Any], None]]] = [
            (MonitorStartedEvent, self._on_monitor_started),
            (MonitorFailedEvent, self._on_monitor_failed),
            (TransferDetectedEvent, self._on_transfer_detected),
            (TokenSweptEvent, self._on_token_swept),
            (TokenSweepFailedEvent, self._on_sweep_failed),
        ]

    def start(self) -> None:
        """Subscribe to all monitor and sweep events."""
        for event_type, handler in self._handlers:
            self._event_bus.on(event_type, handler)
        self._logger.debug("sweep_event_notifier_started")

    def stop(self) -> None:
        """Unsubscribe the handlers registered by start()."""
        handlers = getattr(self._event_bus, "handlers", {})
        for event_type, handler in self._handlers:
            key = event_type.__name__
            if key in handlers:
                handlers[key] = [h for h in handlers[key] if h != handler]
        self._logger.debug("sweep_event_notifier_stopped")

    def _send(self, event_type: str, message: str, payload: dict[str, Any]) -> None:
        self._notification_service.notify(
            NotificationMessage(event_type=event_type, message=message, payload=payload)
        )

    def _on_monitor_started(self, event: MonitorStartedEvent) -> None:
        self._send(
            "monitor_started",
            f"[{event.network}] Monitoring for transfers from block {event.from_block}",
            {
                "network": event.network,
                "wallet": event.wallet_address,
                "recipient": event.recipient_address,
                "from_block": event.from_block,
            },
        )

    def _on_monitor_failed(self, event: MonitorFailedEvent) -> None:
        if event.will_restart:
            message = f"[{event.network}] Fatal error, restarting"
        else:
            message = f"[{event.network}] Fatal error, monitor stopped"
        restart_in = (
            f"{event.restart_delay_seconds:g}s"
            if event.will_restart and event.restart_delay_seconds is not None
            else None
        )
        self._send(
            "monitor_failed",
            message,
            {"network": event.network, "error": event.error_message, "restart_in": restart_in},
        )

    def _on_transfer_detected(self, event: TransferDetectedEvent) -> None:
        self._send(
            "transfer_detected",
            f"[{event.network}] Incoming {event.token_symbol} transfer",
            {
                "network": event.network,
                "block_number": event.block_number,
                "token": _token_label(event.token_symbol, event.token_name),
                "amount": event.amount,
                "token_address": event.token_address,
                "transaction_hash": event.transaction_hash,
            },
        )

    def _on_token_swept(self, event: TokenSweptEvent) -> None:
        self._send(
            "token_swept",
            f"[{event.network}] Transferred {event.amount} {event.token_symbol}",
            {
                "network": event.network,
                "amount": event.amount,
                "token": _token_label(event.token_symbol, event.token_name),
                "recipient": event.recipient_address,
                "transaction_hash": event.transaction_hash,
            },
        )
        self._logger.debug(
            "token_swept_notified",
            token_address=event.token_address,
            tx_hash=event.transaction_hash,
        )

    def _on_sweep_failed(self, event: TokenSweepFailedEvent) -> None:
        self._send(
            "sweep_failed",
            f"[{event.network}] Transfer failed for {event.token_symbol}",
            {
                "network": event.network,
                "token": event.token_symbol,
                "token_address": event.token_address,
                "error": event.error_message,
                "transaction_hash": event.transaction_hash,
            },
        )
