# -*- coding: utf-8 -*-
"""
Entry point for the token sweeper.

Orchestrates: logging, settings validation, container, notifications, one
NetworkMonitor task per configured network, shutdown (SIGINT/SIGTERM or CancelledError).
Events flow: monitors -> event bus -> SweepEventNotifier -> NotificationService.

Run with: python -m evm_token_sweeper.main

Notebook usage:
    from evm_token_sweeper.main import run
    await run()  # Interrupt kernel to stop; monitors are cancelled on CancelledError.
"""
from __future__ import annotations

import asyncio
import signal
import sys
from typing import Any

import structlog
from pydantic import ValidationError

from evm_token_sweeper.DI import Container
from evm_token_sweeper.config import Settings, get_settings
from evm_token_sweeper.exceptions import (
    ConfigurationError,
    InvalidConfigError,
    MissingRequiredConfigError,
)
from evm_token_sweeper.logging.config import configure_logging
from evm_token_sweeper.models.network import NetworkConfig
from evm_token_sweeper.notifications.types import NotificationMessage
from evm_token_sweeper.utils import is_hex_address, mask_address


def validate_settings(settings: Settings) -> list[NetworkConfig]:
    """Check the values the process cannot run without and return the networks to monitor.

    The private key is only checked for presence; a malformed key is reported by
    each monitor when it derives the wallet.

    Raises:
        MissingRequiredConfigError: Private key, recipient or every network endpoint missing.
        InvalidConfigError: Recipient is not a 0x-prefixed 40-hex-digit address.
    """
    wallet = settings.wallet
    if not (wallet.private_key or "").strip():
        raise MissingRequiredConfigError("WALLET__PRIVATE_KEY")
    recipient = (wallet.recipient_address or "").strip()
    if not recipient:
        raise MissingRequiredConfigError("WALLET__RECIPIENT_ADDRESS")
    if not is_hex_address(recipient):
        raise InvalidConfigError("WALLET__RECIPIENT_ADDRESS", "expected a 0x-prefixed 20-byte hex address")
    networks = settings.networks.configured
    if not networks:
        raise MissingRequiredConfigError("NETWORKS__<NAME>_RPC_URL")
    return networks


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise InvalidConfigError("settings", str(e)) from e


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def _stop_monitors(tasks: list[asyncio.Task[None]], logger: Any) -> None:
    for task in tasks:
        task.cancel()
    results = await asyncio.gather(*tasks, return_exceptions=True)
    for task, result in zip(tasks, results):
        if isinstance(result, Exception):
            logger.error(
                "main_monitor_crashed",
                task_name=task.get_name(),
                error_type=type(result).__name__,
                error_message=str(result),
            )


async def run() -> None:
    settings = _load_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    try:
        networks = validate_settings(settings)
    except ConfigurationError as e:
        logger.error("main_invalid_configuration", error_message=str(e))
        raise

    recipient = (settings.wallet.recipient_address or "").strip()
    container = Container()
    notification_service = container.notification_service()
    event_notifier = container.sweep_event_notifier()
    await notification_service.initialize()
    event_notifier.start()

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    network_names = [n.name for n in networks]
    logger.info(
        "main_sweeper_started",
        networks=network_names,
        recipient=mask_address(recipient),
        custom_tokens_count=len(settings.wallet.custom_tokens),
    )
    notification_service.notify(
        NotificationMessage(
            event_type="system_started",
            message="Token sweeper started",
            payload={"recipient": recipient, "networks": network_names},
        )
    )

    tasks = [
        asyncio.create_task(container.network_monitor(network=network).run(), name=f"monitor-{network.name}")
        for network in networks
    ]
    try:
        await shutdown_event.wait()
    finally:
        await _stop_monitors(tasks, logger)
        event_notifier.stop()
        notification_service.notify(
            NotificationMessage(
                event_type="system_stopped",
                message="Token sweeper stopped",
                payload={"networks": network_names},
            )
        )
        await notification_service.shutdown()
        logger.info("main_shutdown_complete")


def main() -> None:
    try:
        asyncio.run(run())
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    except KeyboardInterrupt:
        pass


__all__ = ["main", "run", "validate_settings"]

if __name__ == "__main__":
    main()
