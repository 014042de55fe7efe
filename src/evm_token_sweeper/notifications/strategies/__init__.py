"""Notification strategies."""

from evm_token_sweeper.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from evm_token_sweeper.notifications.strategies.console import ConsoleNotifier
from evm_token_sweeper.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
