"""Inbound ERC-20 transfer discovery via eth_getLogs."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from evm_token_sweeper.clients.rpc_client.erc20 import TRANSFER_TOPIC, address_topic
from evm_token_sweeper.models.transfer_log import TransferLogEntry

if TYPE_CHECKING:
    from evm_token_sweeper.clients.rpc_client import RpcClient


class TransferLogPoller:
    """Queries Transfer logs whose indexed `to` is the watched wallet, on any token contract."""

    def __init__(
        self,
        rpc: RpcClient,
        wallet_address: str,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._rpc = rpc
        self._wallet_topic = address_topic(wallet_address)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def topics(self) -> list[str | None]:
        """Log filter topics: Transfer signature, any sender, wallet as recipient."""
        return [TRANSFER_TOPIC, None, self._wallet_topic]

    async def current_height(self) -> int:
        return await self._rpc.block_number()

    async def fetch(self, from_block: int, to_block: int) -> list[TransferLogEntry]:
        """Return inbound transfers in the inclusive range [from_block, to_block], in node order.

        An empty range (to_block < from_block) returns [] without querying. Removed
        (reorged) logs are dropped; items missing a hash, address or block are
        logged and skipped.

        Raises:
            RpcError: If the log query fails.
        """
        if to_block < from_block:
            return []
        logs = await self._rpc.get_logs(
            from_block=from_block,
            to_block=to_block,
            topics=self.topics,
        )
        entries: list[TransferLogEntry] = []
        for log in logs:
            if log.get("removed"):
                continue
            try:
                entries.append(TransferLogEntry.from_rpc_log(log))
            except ValueError as e:
                self._logger.warning(
                    "transfer_log_malformed_skipped",
                    error_message=str(e),
                    tx_hash=log.get("transactionHash"),
                )
        self._logger.debug(
            "transfer_logs_fetched",
            from_block=from_block,
            to_block=to_block,
            logs_count=len(entries),
        )
        return entries
