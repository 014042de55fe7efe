"""Incoming transfer handling: dedup, token lookup, settling delay, sweep."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from evm_token_sweeper.events.sweeps import TransferDetectedEvent

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]
    from evm_token_sweeper.models.sweep_result import SweepResult
    from evm_token_sweeper.models.token import TokenDetails
    from evm_token_sweeper.models.transfer_log import TransferLogEntry
    from evm_token_sweeper.persistence.repositories.interfaces import (
        IProcessedTransactionRepository,
    )
    from evm_token_sweeper.services.sweep import SweepExecutor
    from evm_token_sweeper.services.token_details import TokenDetailsResolver


class IncomingTransferHandler:
    """Turns one detected Transfer log into at most one sweep attempt."""

    _event_bus: Optional["EventBus"]

    def __init__(
        self,
        ledger: IProcessedTransactionRepository,
        resolver: TokenDetailsResolver,
        executor: SweepExecutor,
        *,
        network_name: str,
        settling_delay_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the handler.

        Args:
            ledger: Dedup ledger of the owning monitor session.
            resolver: Token details lookup.
            executor: Sweep executor bound to the session's wallet.
            network_name: Network label for logs and events.
            settling_delay_seconds: Wait between detection and sweep.
            sleep: Awaitable sleep (injected for tests).
            event_bus: Optional bubus bus for TransferDetectedEvent.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._ledger = ledger
        self._resolver = resolver
        self._executor = executor
        self._network = network_name
        self._settling_delay = settling_delay_seconds
        self._sleep = sleep
        self._event_bus = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def handle(self, entry: TransferLogEntry) -> SweepResult | None:
        """Handle one log entry.

        Returns None when the transaction was already handled; otherwise the
        sweep result. A failed sweep stays marked in the ledger and is not retried.
        """
        tx_hash = entry.transaction_hash
        if await self._ledger.has_processed(tx_hash):
            self._logger.debug("transfer_duplicate_skipped", tx_hash=tx_hash)
            return None
        # Marked before the first real suspension so a repeat inside the batch is skipped.
        await self._ledger.mark_processed(tx_hash)

        details = await self._resolver.resolve(entry.token_address)
        amount = (
            details.format_amount(entry.amount_raw) if entry.amount_raw is not None else None
        )
        self._logger.info(
            "transfer_detected",
            block_number=entry.block_number,
            token_address=entry.token_address,
            token_symbol=details.symbol,
            token_name=details.name,
            amount=amount,
            tx_hash=tx_hash,
        )
        self._emit_detected(entry, details, amount)

        await self._sleep(self._settling_delay)
        return await self._executor.sweep(entry.token_address, details)

    def _emit_detected(
        self,
        entry: TransferLogEntry,
        details: TokenDetails,
        amount: str | None,
    ) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            TransferDetectedEvent(
                network=self._network,
                transaction_hash=entry.transaction_hash,
                token_address=entry.token_address,
                token_symbol=details.symbol,
                token_name=details.name,
                block_number=entry.block_number,
                amount=amount,
            )
        )
