# -*- coding: utf-8 -*-
"""Sweep execution service: move a wallet's full token balance to the recipient."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

import structlog
from eth_utils import to_checksum_address

from evm_token_sweeper.clients.rpc_client.erc20 import Erc20Token, encode_transfer
from evm_token_sweeper.clients.rpc_client.rpc_client import hex_to_int
from evm_token_sweeper.events.sweeps import TokenSweepFailedEvent, TokenSweptEvent
from evm_token_sweeper.exceptions import RpcError, TransactionRevertedError
from evm_token_sweeper.models.sweep_result import SweepResult
from evm_token_sweeper.utils import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]
    from evm_token_sweeper.clients.rpc_client import RpcClient
    from evm_token_sweeper.config import Settings
    from evm_token_sweeper.models.token import TokenDetails
    from evm_token_sweeper.models.wallet import WalletIdentity


class SweepExecutor:
    """Transfers the watched wallet's whole balance of a token to the recipient."""

    _event_bus: Optional["EventBus"]

    def __init__(
        self,
        settings: "Settings",
        rpc: "RpcClient",
        wallet: "WalletIdentity",
        recipient_address: str,
        *,
        network_name: str,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._rpc = rpc
        self._wallet = wallet
        self._recipient = recipient_address.strip()
        self._network = network_name
        self._event_bus = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sweep(self, token_address: str, details: "TokenDetails") -> SweepResult:
        """Sweep the full balance of token_address.

        A zero balance is a no-op (no transaction). Any failure while reading the
        balance, submitting or confirming is logged, reported and returned as a
        FAILED result; this method does not raise.

        Args:
            token_address: Token contract address (0x...).
            details: Token details used for logging and amount formatting.

        Returns:
            SweepResult with outcome SWEPT, NO_BALANCE or FAILED.
        """
        token = Erc20Token(self._rpc, token_address)
        balance = 0
        amount: str | None = None
        tx_hash: str | None = None
        try:
            balance = await token.balance_of(self._wallet.address)
            if balance == 0:
                self._logger.debug(
                    "sweep_no_balance",
                    token_address=token.address,
                    token_symbol=details.symbol,
                )
                return SweepResult.no_balance(token.address)

            amount = details.format_amount(balance)
            self._logger.info(
                "sweep_started",
                token_address=token.address,
                token_symbol=details.symbol,
                token_name=details.name,
                amount=amount,
                recipient=self._recipient,
            )
            tx_hash = await self._submit_transfer(token.address, balance)
            self._logger.debug("sweep_submitted", token_address=token.address, tx_hash=tx_hash)

            receipt = await self._rpc.wait_for_receipt(
                tx_hash,
                poll_seconds=self._settings.monitor.receipt_poll_seconds,
                timeout_seconds=self._settings.monitor.receipt_timeout_seconds,
            )
            if hex_to_int(receipt.get("status", "0x1")) != 1:
                block = receipt.get("blockNumber")
                raise TransactionRevertedError(tx_hash, hex_to_int(block) if block else None)
        except Exception as e:
            self._logger.error(
                "sweep_failed",
                token_address=token.address,
                token_symbol=details.symbol,
                amount=amount,
                tx_hash=tx_hash,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            self._emit_failed(token.address, details, str(e) or type(e).__name__, tx_hash)
            return SweepResult.failed(
                token.address,
                str(e) or type(e).__name__,
                amount_raw=balance,
                amount=amount,
                transaction_hash=tx_hash,
            )

        self._logger.info(
            "sweep_confirmed",
            token_address=token.address,
            token_symbol=details.symbol,
            amount=amount,
            tx_hash=tx_hash,
        )
        self._emit_swept(token.address, details, balance, amount, tx_hash)
        return SweepResult.swept(token.address, balance, amount, tx_hash)

    async def _submit_transfer(self, token_address: str, amount: int) -> str:
        """Build, sign and send transfer(recipient, amount). Returns the transaction hash."""
        sender = self._wallet.checksum_address
        data = encode_transfer(self._recipient, amount)
        token_checksum = to_checksum_address(token_address)
        nonce = await self._rpc.get_transaction_count(sender, "pending")
        gas_price = await self._rpc.gas_price()
        chain_id = await self._rpc.chain_id()
        gas = await self._rpc.estimate_gas({"from": sender, "to": token_checksum, "data": data})
        tx: dict[str, Any] = {
            "to": token_checksum,
            "value": 0,
            "data": data,
            "nonce": nonce,
            "gas": gas,
            "gasPrice": gas_price,
            "chainId": chain_id,
        }
        self._logger.debug(
            "sweep_transaction_built",
            wallet_masked=mask_address(self._wallet.address),
            nonce=nonce,
            gas=gas,
            gas_price=gas_price,
            chain_id=chain_id,
        )
        signed = self._wallet.sign_transaction(tx)
        try:
            return await self._rpc.send_raw_transaction(signed.raw_transaction)
        except RpcError as e:
            # A lost response can still mean the node accepted the transaction
            # ("already known" or "nonce too low" on the retry).
            if not await self._is_broadcast(signed.transaction_hash):
                raise
            self._logger.warning(
                "sweep_submit_error_but_broadcast",
                tx_hash=signed.transaction_hash,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return signed.transaction_hash

    async def _is_broadcast(self, tx_hash: str) -> bool:
        try:
            return await self._rpc.get_transaction_by_hash(tx_hash) is not None
        except RpcError:
            return False

    def _emit_swept(
        self,
        token_address: str,
        details: "TokenDetails",
        amount_raw: int,
        amount: str,
        tx_hash: str,
    ) -> None:
        """Emit TokenSweptEvent for SweepEventNotifier."""
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            TokenSweptEvent(
                network=self._network,
                token_address=token_address,
                token_symbol=details.symbol,
                token_name=details.name,
                amount=amount,
                amount_raw=str(amount_raw),
                recipient_address=self._recipient,
                transaction_hash=tx_hash,
            )
        )

    def _emit_failed(
        self,
        token_address: str,
        details: "TokenDetails",
        error_message: str,
        tx_hash: str | None,
    ) -> None:
        """Emit TokenSweepFailedEvent for SweepEventNotifier."""
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            TokenSweepFailedEvent(
                network=self._network,
                token_address=token_address,
                token_symbol=details.symbol,
                error_message=error_message,
                transaction_hash=tx_hash,
            )
        )
