"""Configuration subpackage."""

from evm_token_sweeper.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    MonitorSettings,
    NetworksSettings,
    RpcSettings,
    Settings,
    TelegramNotificationSettings,
    WalletSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "MonitorSettings",
    "NetworksSettings",
    "RpcSettings",
    "Settings",
    "TelegramNotificationSettings",
    "WalletSettings",
    "get_settings",
]
