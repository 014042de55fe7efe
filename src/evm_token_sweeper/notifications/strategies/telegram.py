# -*- coding: utf-8 -*-
"""Telegram notification channel (python-telegram-bot, async)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot, LinkPreviewOptions
from telegram.constants import MessageLimit, ParseMode
from telegram.error import BadRequest, Forbidden, NetworkError, RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from evm_token_sweeper.exceptions import MissingRequiredConfigError
from evm_token_sweeper.notifications.strategies.base import BaseNotificationStrategy
from evm_token_sweeper.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from evm_token_sweeper.config.config import Settings
    from evm_token_sweeper.notifications.types import NotificationStyler


class TelegramNotifier(BaseNotificationStrategy):
    """Send HTML notifications to one Telegram chat with rate limiting and retries."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        cfg = settings.telegram
        if not cfg.enabled or not cfg.api_key or not cfg.chat_id:
            raise MissingRequiredConfigError("TELEGRAM__API_KEY and TELEGRAM__CHAT_ID")
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler = styler
        self._token = str(cfg.api_key)
        self._chat_id = str(cfg.chat_id)
        self._bot = bot
        self._running = False
        self._sent_at: deque[float] = deque()

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            return
        if self._bot is None:
            cfg = self.settings.telegram
            request = HTTPXRequest(
                connect_timeout=cfg.connect_timeout,
                read_timeout=cfg.read_timeout,
                write_timeout=cfg.write_timeout,
                pool_timeout=cfg.pool_timeout,
            )
            self._bot = Bot(token=self._token, request=request)
        self._running = True

    async def shutdown(self) -> None:
        self._running = False
        self._bot = None

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or self._bot is None:
            self._logger.warning("telegram_not_running_cannot_send")
            return
        text = self._styler.render(message, parse_html=True)
        parse_mode: Optional[str] = ParseMode.HTML
        if len(text) > MessageLimit.MAX_TEXT_LENGTH:
            # Cutting HTML can split a tag or an entity; send oversized messages as plain text.
            text = self._styler.render(message, parse_html=False)
            parse_mode = None
            if len(text) > MessageLimit.MAX_TEXT_LENGTH:
                text = text[: MessageLimit.MAX_TEXT_LENGTH - 1] + "…"
        await self._wait_for_rate_limit()
        await self._send_with_retries(text, message.event_type, parse_mode)

    async def _send_with_retries(self, text: str, event_type: str, parse_mode: Optional[str]) -> None:
        assert self._bot is not None
        cfg = self.settings.telegram
        for attempt in range(1, cfg.max_retries + 2):
            try:
                await self._bot.send_message(
                    chat_id=self._chat_id,
                    text=text,
                    parse_mode=parse_mode,
                    link_preview_options=LinkPreviewOptions(is_disabled=True),
                )
                self._sent_at.append(time.monotonic())
                return
            except RetryAfter as exc:
                delay = float(getattr(exc, "retry_after", 1.0) or 1.0)
                self._logger.warning("telegram_rate_limited", retry_seconds=delay, attempt=attempt)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_message_rejected",
                    notification_event_type=event_type,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return
            except (NetworkError, TelegramError) as exc:
                delay = min(60.0, cfg.backoff_base_seconds * (2 ** (attempt - 1)))
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    backoff_seconds=delay,
                )
            await asyncio.sleep(delay)

        self._logger.error("telegram_max_retries_exceeded", notification_event_type=event_type)

    async def _wait_for_rate_limit(self) -> None:
        limit = self.settings.telegram.messages_per_minute
        now = time.monotonic()
        while self._sent_at and self._sent_at[0] < now - 60:
            self._sent_at.popleft()
        if len(self._sent_at) >= limit:
            await asyncio.sleep(max(0.0, 60 - (now - self._sent_at[0])))
