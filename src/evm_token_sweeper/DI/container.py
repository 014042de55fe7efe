# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from evm_token_sweeper.config import Settings, get_settings
from evm_token_sweeper.events.bus import get_event_bus
from evm_token_sweeper.notifications.notification_manager import NotificationService
from evm_token_sweeper.notifications.strategies.base import BaseNotificationStrategy
from evm_token_sweeper.notifications.strategies.console import ConsoleNotifier
from evm_token_sweeper.notifications.strategies.telegram import TelegramNotifier
from evm_token_sweeper.notifications.stylers.notification_styler import EventNotificationStyler
from evm_token_sweeper.services.monitor import NetworkMonitor
from evm_token_sweeper.services.notifications import SweepEventNotifier


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, event bus, notifications and network monitors.

    network_monitor is a Factory: call container.network_monitor(network=cfg) once
    per configured network; each monitor builds its own RPC connection per session.
    """

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    sweep_event_notifier = providers.Singleton(
        SweepEventNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )

    network_monitor = providers.Factory(
        NetworkMonitor,
        settings=config,
        event_bus=event_bus,
    )
