# -*- coding: utf-8 -*-
"""Unit tests for TransferLogPoller."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, cast

from evm_token_sweeper.clients.rpc_client.erc20 import TRANSFER_TOPIC, address_topic
from evm_token_sweeper.models.wallet import WalletIdentity
from evm_token_sweeper.services.transfer_polling import TransferLogPoller


def _log(tx_byte: str, block: int, **overrides: Any) -> dict[str, Any]:
    log: dict[str, Any] = {
        "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "topics": [TRANSFER_TOPIC],
        "data": "0x" + (1).to_bytes(32, "big").hex(),
        "blockNumber": hex(block),
        "transactionHash": "0x" + tx_byte * 32,
        "logIndex": "0x0",
    }
    log.update(overrides)
    return log


async def test_fetch_filters_on_wallet_as_recipient_for_any_contract(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    wallet: WalletIdentity,
) -> None:
    rpc = fake_rpc_factory()
    poller = TransferLogPoller(cast(Any, rpc), wallet.address)

    await poller.fetch(101, 110)

    rpc.get_logs.assert_awaited_once_with(
        from_block=101,
        to_block=110,
        topics=[TRANSFER_TOPIC, None, address_topic(wallet.address)],
    )


async def test_fetch_empty_range_does_not_query(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    wallet: WalletIdentity,
) -> None:
    rpc = fake_rpc_factory()
    poller = TransferLogPoller(cast(Any, rpc), wallet.address)

    assert await poller.fetch(101, 100) == []
    rpc.get_logs.assert_not_called()


async def test_fetch_keeps_node_order_and_skips_removed_and_malformed(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    wallet: WalletIdentity,
) -> None:
    rpc = fake_rpc_factory()
    rpc.get_logs.return_value = [
        _log("02", 102),
        _log("01", 101, removed=True),
        _log("03", 103, transactionHash=None),
        _log("04", 101),
    ]
    poller = TransferLogPoller(cast(Any, rpc), wallet.address)

    entries = await poller.fetch(101, 103)

    assert [e.transaction_hash for e in entries] == ["0x" + "02" * 32, "0x" + "04" * 32]


async def test_current_height_reads_block_number(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    wallet: WalletIdentity,
) -> None:
    rpc = fake_rpc_factory(block_number=4242)

    assert await TransferLogPoller(cast(Any, rpc), wallet.address).current_height() == 4242
