# -*- coding: utf-8 -*-
"""Base notification channel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from evm_token_sweeper.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from evm_token_sweeper.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Abstract notification channel (console, Telegram, ...)."""

    def __init__(self, settings: "Settings"):
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True between initialize() and shutdown()."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the channel."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the channel."""

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver one message."""
