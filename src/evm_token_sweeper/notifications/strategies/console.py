# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from evm_token_sweeper.notifications.types import NotificationMessage
from evm_token_sweeper.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:  # pragma: no cover
    from evm_token_sweeper.config import Settings
    from evm_token_sweeper.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Print plain-text notifications to stdout (or the given stream)."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(settings)
        self._running = False
        self._styler = styler
        self._stream = stream

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        """Send a notification to the console."""
        if not self.is_running or not self.settings.console.enabled:
            return
        body = self._styler.render(message, parse_html=False)
        print(body, file=self._stream or sys.stdout, flush=True)
