"""Notification stylers."""

from evm_token_sweeper.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]
