# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, WALLET__PRIVATE_KEY.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from evm_token_sweeper.models.network import NetworkConfig
from evm_token_sweeper.utils.validation import parse_token_addresses


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "evm-token-sweeper"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/token_sweeper.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class RpcSettings(BaseSettings):
    """JSON-RPC transport configuration (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Total HTTP timeout for a single JSON-RPC request.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Attempts per request on transport errors (connection, timeout, HTTP status).",
    )


class WalletSettings(BaseSettings):
    """Controlled wallet, sweep recipient and startup token list (from env WALLET__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    private_key: Optional[str] = Field(
        default=None,
        description="Hex private key of the watched wallet (64 hex chars, 0x prefix optional).",
    )
    recipient_address: Optional[str] = Field(
        default=None,
        description="Address every swept balance is sent to.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it (list[str] would trigger json.loads).
    custom_tokens_raw: str = Field(
        default="",
        description="Token contracts swept once at startup, comma-separated. Env: WALLET__CUSTOM_TOKENS.",
        validation_alias="custom_tokens",
    )

    @computed_field
    @property
    def custom_tokens(self) -> list[str]:
        """Lower-cased, well-formed 0x addresses from custom_tokens_raw (malformed entries dropped)."""
        return parse_token_addresses(self.custom_tokens_raw)


class NetworksSettings(BaseSettings):
    """RPC endpoints of the monitored networks (from env NETWORKS__*). Unset endpoints are skipped."""

    model_config = SettingsConfigDict(extra="ignore")

    ethereum_rpc_url: Optional[str] = None
    arbitrum_rpc_url: Optional[str] = None
    base_rpc_url: Optional[str] = None
    polygon_rpc_url: Optional[str] = None
    extra_raw: str = Field(
        default="",
        description="Additional networks as Name=url pairs, comma-separated. Env: NETWORKS__EXTRA.",
        validation_alias="extra",
    )

    @computed_field
    @property
    def configured(self) -> list[NetworkConfig]:
        """Networks with a non-empty endpoint, built-in ones first, then extras in declaration order."""
        networks: list[NetworkConfig] = []
        builtin = (
            ("Ethereum", self.ethereum_rpc_url),
            ("Arbitrum", self.arbitrum_rpc_url),
            ("Base", self.base_rpc_url),
            ("Polygon", self.polygon_rpc_url),
        )
        for name, url in builtin:
            if url and url.strip():
                networks.append(NetworkConfig(name=name, rpc_url=url.strip()))
        for pair in self.extra_raw.split(","):
            name, sep, url = pair.partition("=")
            if not sep or not name.strip() or not url.strip():
                continue
            networks.append(NetworkConfig(name=name.strip(), rpc_url=url.strip()))
        return networks


class MonitorSettings(BaseSettings):
    """Timing of the per-network monitor (from env MONITOR__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    poll_seconds: float = Field(
        default=15.0,
        ge=0.5,
        le=600.0,
        description="Interval between transfer-log polls.",
    )
    settling_delay_seconds: float = Field(
        default=60.0,
        ge=0.0,
        le=3600.0,
        description="Wait between detecting an inbound transfer and sweeping it.",
    )
    restart_delay_seconds: float = Field(
        default=30.0,
        ge=0.0,
        le=3600.0,
        description="Wait before restarting a monitor whose startup failed.",
    )
    receipt_poll_seconds: float = Field(
        default=2.0,
        ge=0.1,
        le=60.0,
        description="Interval between eth_getTransactionReceipt checks while confirming a sweep.",
    )
    receipt_timeout_seconds: Optional[float] = Field(
        default=None,
        ge=1.0,
        description="Give up confirming a sweep after this many seconds (unset waits indefinitely).",
    )


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, MONITOR__POLL_SECONDS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    rpc: RpcSettings = Field(default_factory=RpcSettings)
    wallet: WalletSettings = Field(default_factory=WalletSettings)
    networks: NetworksSettings = Field(default_factory=NetworksSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(monitor__poll_seconds=5)
        - from_env(monitor={"poll_seconds": 5})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from evm_token_sweeper.config import get_settings

        settings = get_settings()
        poll_seconds = settings.monitor.poll_seconds
        networks = settings.networks.configured
    """
    return Settings()
