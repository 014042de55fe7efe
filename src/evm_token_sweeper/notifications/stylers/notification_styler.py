# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji headers (HTML for Telegram, plain for console)."""

from __future__ import annotations

import html
from typing import Any

from evm_token_sweeper.notifications.types import NotificationMessage, NotificationStyler


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type as a title line followed by labelled rows."""

    _TITLES: dict[str, tuple[str, str]] = {
        "system_started": ("🤖", "Token Sweeper Started"),
        "system_stopped": ("⏹️", "Token Sweeper Stopped"),
        "monitor_started": ("🟢", "Monitor Active"),
        "monitor_failed": ("🛑", "Monitor Error"),
        "transfer_detected": ("📨", "Incoming Transfer Detected"),
        "token_swept": ("✅", "Tokens Swept"),
        "sweep_failed": ("❌", "Sweep Failed"),
    }

    # Payload keys rendered per event type, in display order: (label, key).
    _ROWS: dict[str, list[tuple[str, str]]] = {
        "system_started": [("Recipient", "recipient"), ("Networks", "networks")],
        "monitor_started": [
            ("Network", "network"),
            ("Wallet", "wallet"),
            ("Recipient", "recipient"),
            ("From block", "from_block"),
        ],
        "monitor_failed": [
            ("Network", "network"),
            ("Error", "error"),
            ("Restart in", "restart_in"),
        ],
        "transfer_detected": [
            ("Network", "network"),
            ("Block", "block_number"),
            ("Token", "token"),
            ("Amount", "amount"),
            ("Contract", "token_address"),
            ("Tx", "transaction_hash"),
        ],
        "token_swept": [
            ("Network", "network"),
            ("Amount", "amount"),
            ("Token", "token"),
            ("Recipient", "recipient"),
            ("Tx", "transaction_hash"),
        ],
        "sweep_failed": [
            ("Network", "network"),
            ("Token", "token"),
            ("Contract", "token_address"),
            ("Error", "error"),
            ("Tx", "transaction_hash"),
        ],
    }

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Render the title, the summary message and the payload rows of the event type.

        Unknown event types list every non-empty payload key in sorted order.
        """
        emoji, title = self._title(message.event_type)
        heading = message.title or title
        lines = [f"{emoji} {self._bold(heading, parse_html)}"]
        if message.message:
            lines.append(self._text(message.message, parse_html))

        payload: dict[str, Any] = dict(message.payload or {})
        rows = self._ROWS.get(message.event_type)
        if rows is None:
            rows = [(key, key) for key in sorted(payload)]
        row_lines = [
            f"{self._bold(label + ':', parse_html)} {self._text(self._format_value(payload[key]), parse_html)}"
            for label, key in rows
            if payload.get(key) not in (None, "", [])
        ]
        if row_lines:
            lines.append("─" * 12)
            lines.extend(row_lines)
        return "\n".join(lines).strip()

    @classmethod
    def _title(cls, event_type: str) -> tuple[str, str]:
        return cls._TITLES.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        if isinstance(value, bool):
            return "yes" if value else "no"
        return str(value)

    @staticmethod
    def _bold(text: str, parse_html: bool) -> str:
        return f"<b>{html.escape(text)}</b>" if parse_html else text

    @staticmethod
    def _text(text: str, parse_html: bool) -> str:
        return html.escape(text) if parse_html else text
