"""Notification-related services."""

from evm_token_sweeper.services.notifications.sweep_event_notifier import SweepEventNotifier

__all__ = ["SweepEventNotifier"]
