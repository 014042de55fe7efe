# -*- coding: utf-8 -*-
"""Per-network monitor: startup sweep, transfer polling and restart policy."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from evm_token_sweeper.clients.http import AsyncHttpClient
from evm_token_sweeper.clients.rpc_client import RpcClient
from evm_token_sweeper.events.sweeps import MonitorFailedEvent, MonitorStartedEvent
from evm_token_sweeper.exceptions import (
    FatalMonitorError,
    InvalidPrivateKeyError,
    PollingError,
    StartupError,
    TransientMonitorError,
)
from evm_token_sweeper.models.monitor_state import MonitorState
from evm_token_sweeper.models.wallet import WalletIdentity
from evm_token_sweeper.services.sweep import SweepExecutor
from evm_token_sweeper.services.token_details import TokenDetailsResolver
from evm_token_sweeper.services.transfer_handling import IncomingTransferHandler
from evm_token_sweeper.services.transfer_polling import TransferLogPoller

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]
    from evm_token_sweeper.config import Settings
    from evm_token_sweeper.models.network import NetworkConfig


RpcFactory = Callable[["NetworkConfig"], RpcClient]


class MonitorStatus(StrEnum):
    """Lifecycle of a NetworkMonitor."""

    STARTING = "starting"
    MONITORING = "monitoring"
    FAILED = "failed"
    RESTARTING = "restarting"
    STOPPED = "stopped"


@dataclass
class MonitorSession:
    """Everything one monitor run owns. Discarded (connection closed) on restart."""

    rpc: RpcClient
    wallet: WalletIdentity
    state: MonitorState
    resolver: TokenDetailsResolver
    executor: SweepExecutor
    poller: TransferLogPoller
    handler: IncomingTransferHandler

    async def aclose(self) -> None:
        await self.rpc.aclose()


class NetworkMonitor:
    """Watches one network for inbound ERC-20 transfers and sweeps them.

    Runs as a single task: startup (wallet, connection, checkpoint, custom token
    sweep), then a poll loop where each tick is fully drained before the next
    sleep. Startup failures restart the whole session after a delay, except a
    malformed private key, which stops this monitor for good.
    """

    _event_bus: Optional["EventBus"]

    def __init__(
        self,
        network: "NetworkConfig",
        settings: "Settings",
        *,
        rpc_factory: Optional[RpcFactory] = None,
        event_bus: Optional[Any] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            network: Network name and RPC endpoint.
            settings: Application settings (wallet, monitor, rpc sections).
            rpc_factory: Builds a fresh RpcClient per session (defaults to HTTP JSON-RPC).
            event_bus: Optional bubus bus for monitor and sweep events.
            sleep: Awaitable sleep for poll cadence, settling and restart delays.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._network = network
        self._settings = settings
        self._rpc_factory = rpc_factory or self._default_rpc_factory
        self._event_bus = event_bus
        self._sleep = sleep
        self._get_logger = get_logger
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._status = MonitorStatus.STARTING
        self._session: MonitorSession | None = None
        self._starts = 0

    @property
    def network(self) -> "NetworkConfig":
        return self._network

    @property
    def status(self) -> MonitorStatus:
        return self._status

    @property
    def session(self) -> MonitorSession | None:
        """The live session, or None while starting, restarting or stopped."""
        return self._session

    @property
    def starts(self) -> int:
        """Number of startup attempts so far (1 + restarts)."""
        return self._starts

    def _default_rpc_factory(self, network: "NetworkConfig") -> RpcClient:
        return RpcClient(
            AsyncHttpClient(self._settings, get_logger=self._get_logger),
            network.rpc_url,
            get_logger=self._get_logger,
        )

    async def run(self) -> None:
        """Run until cancelled, or until a non-restartable startup error."""
        with bound_contextvars(network=self._network.name):
            try:
                while True:
                    try:
                        session = await self.start()
                    except FatalMonitorError as e:
                        if not self._on_fatal(e):
                            return
                        self._status = MonitorStatus.RESTARTING
                        await self._sleep(self._settings.monitor.restart_delay_seconds)
                        continue

                    try:
                        await self.monitor(session)
                    finally:
                        self._session = None
                        await session.aclose()
            except asyncio.CancelledError:
                self._status = MonitorStatus.STOPPED
                self._logger.info("monitor_stopped", monitor_stop_reason="cancelled")
                raise

    async def start(self) -> MonitorSession:
        """Starting phase: derive wallet, connect, set the checkpoint, sweep custom tokens.

        Raises:
            InvalidPrivateKeyError: If no wallet can be derived from the private key.
            StartupError: For any other failure (connection, block height, ...).
        """
        self._status = MonitorStatus.STARTING
        self._session = None
        self._starts += 1
        try:
            wallet = WalletIdentity.from_private_key(self._settings.wallet.private_key or "")
        except ValueError as e:
            raise InvalidPrivateKeyError(
                self._network.name,
                "Invalid private key: it must be 64 hex characters (0x prefix optional)",
            ) from e

        try:
            rpc = self._rpc_factory(self._network)
        except Exception as e:
            raise StartupError(self._network.name, f"{type(e).__name__}: {e}") from e
        try:
            state = MonitorState(last_checked_block=await rpc.block_number())
            session = self._build_session(rpc, wallet, state)
            self._logger.info(
                "monitor_started",
                wallet=wallet.address,
                recipient=self._recipient,
                from_block=state.last_checked_block,
                monitor_attempt=self._starts,
            )
            self._emit_started(wallet, state)
            await self._sweep_custom_tokens(session)
        except asyncio.CancelledError:
            await rpc.aclose()
            raise
        except Exception as e:
            await rpc.aclose()
            raise StartupError(self._network.name, f"{type(e).__name__}: {e}") from e

        self._session = session
        return session

    async def monitor(self, session: MonitorSession) -> None:
        """Monitoring phase: poll every poll_seconds forever. Tick failures are swallowed."""
        self._status = MonitorStatus.MONITORING
        poll_seconds = self._settings.monitor.poll_seconds
        self._logger.debug(
            "monitor_polling_started",
            from_block=session.state.last_checked_block,
            poll_seconds=poll_seconds,
        )
        while True:
            await self._sleep(poll_seconds)
            try:
                await self.poll_once(session)
            except TransientMonitorError as e:
                self._logger.debug(
                    "monitor_poll_failed",
                    error_type=type(e.__cause__ or e).__name__,
                    error_message=str(e.__cause__ or e),
                    checkpoint_block=session.state.last_checked_block,
                )

    async def poll_once(self, session: MonitorSession) -> int:
        """Run one polling tick.

        Queries (checkpoint, current height], hands every entry to the handler in
        order and only then advances the checkpoint to the current height.

        Returns:
            Number of log entries handled.

        Raises:
            PollingError: If the height or log query fails (checkpoint unchanged).
        """
        state = session.state
        from_block = state.last_checked_block + 1
        try:
            current = await session.poller.current_height()
            if current <= state.last_checked_block:
                return 0
            entries = await session.poller.fetch(from_block, current)
        except Exception as e:
            raise PollingError(self._network.name, f"poll failed: {e}") from e

        for entry in entries:
            try:
                await session.handler.handle(entry)
            except Exception as e:
                self._logger.error(
                    "transfer_handling_failed",
                    tx_hash=entry.transaction_hash,
                    token_address=entry.token_address,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        state.advance_to(current)
        if entries:
            self._logger.debug(
                "monitor_batch_handled",
                from_block=from_block,
                to_block=current,
                logs_count=len(entries),
                processed_count=len(state.ledger),
            )
        return len(entries)

    @property
    def _recipient(self) -> str:
        return (self._settings.wallet.recipient_address or "").strip()

    def _build_session(
        self,
        rpc: RpcClient,
        wallet: WalletIdentity,
        state: MonitorState,
    ) -> MonitorSession:
        name = self._network.name
        resolver = TokenDetailsResolver(rpc, get_logger=self._get_logger)
        executor = SweepExecutor(
            self._settings,
            rpc,
            wallet,
            self._recipient,
            network_name=name,
            event_bus=self._event_bus,
            get_logger=self._get_logger,
        )
        poller = TransferLogPoller(rpc, wallet.address, get_logger=self._get_logger)
        handler = IncomingTransferHandler(
            state.ledger,
            resolver,
            executor,
            network_name=name,
            settling_delay_seconds=self._settings.monitor.settling_delay_seconds,
            sleep=self._sleep,
            event_bus=self._event_bus,
            get_logger=self._get_logger,
        )
        return MonitorSession(
            rpc=rpc,
            wallet=wallet,
            state=state,
            resolver=resolver,
            executor=executor,
            poller=poller,
            handler=handler,
        )

    async def _sweep_custom_tokens(self, session: MonitorSession) -> None:
        """One-shot sweep of the configured token list, in order, bypassing the ledger."""
        tokens = self._settings.wallet.custom_tokens
        if not tokens:
            return
        self._logger.info("custom_tokens_check_started", custom_tokens_count=len(tokens))
        for token_address in tokens:
            details = await session.resolver.resolve(token_address)
            await session.executor.sweep(token_address, details)

    def _on_fatal(self, error: FatalMonitorError) -> bool:
        """Log and report a startup failure. Returns True if the monitor should restart."""
        cause = error.__cause__
        if not error.restartable:
            self._status = MonitorStatus.STOPPED
            self._logger.error(
                "monitor_fatal_error",
                error_type=type(error).__name__,
                error_message=str(error),
                will_restart=False,
            )
            self._emit_failed(error, will_restart=False)
            return False

        self._status = MonitorStatus.FAILED
        self._logger.error(
            "monitor_fatal_error",
            error_type=type(cause or error).__name__,
            error_message=str(error),
            will_restart=True,
            restart_delay_seconds=self._settings.monitor.restart_delay_seconds,
            exc_info=cause or error,
        )
        self._emit_failed(error, will_restart=True)
        return True

    def _emit_started(self, wallet: WalletIdentity, state: MonitorState) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            MonitorStartedEvent(
                network=self._network.name,
                wallet_address=wallet.address,
                recipient_address=self._recipient,
                from_block=state.last_checked_block,
                custom_tokens_count=len(self._settings.wallet.custom_tokens),
            )
        )

    def _emit_failed(self, error: FatalMonitorError, *, will_restart: bool) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            MonitorFailedEvent(
                network=self._network.name,
                error_type=type(error).__name__,
                error_message=str(error),
                will_restart=will_restart,
                restart_delay_seconds=(
                    self._settings.monitor.restart_delay_seconds if will_restart else None
                ),
            )
        )

    def __repr__(self) -> str:
        return (
            f"NetworkMonitor(network={self._network.name!r}, status={self._status.value!r}, "
            f"starts={self._starts})"
        )


__all__ = ["MonitorSession", "MonitorStatus", "NetworkMonitor", "RpcFactory"]
