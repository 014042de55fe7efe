# -*- coding: utf-8 -*-
"""Unit tests for RpcClient JSON-RPC handling."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from evm_token_sweeper.clients.rpc_client.rpc_client import RpcClient, hex_to_int
from evm_token_sweeper.exceptions import ReceiptTimeoutError, RpcError


def _rpc(*responses: Any, sleep: Any = None) -> tuple[RpcClient, SimpleNamespace]:
    http = SimpleNamespace(post=AsyncMock(side_effect=list(responses)), aclose=AsyncMock())
    client = RpcClient(cast(Any, http), " http://rpc ", sleep=sleep or AsyncMock())
    return client, http


def test_hex_to_int() -> None:
    assert hex_to_int("0x1a") == 26
    assert hex_to_int("0x") == 0
    assert hex_to_int(7) == 7
    with pytest.raises(RpcError):
        hex_to_int("26")


async def test_call_sends_jsonrpc_envelope_and_returns_result() -> None:
    client, http = _rpc({"jsonrpc": "2.0", "id": 1, "result": "0x10"})

    assert await client.block_number() == 16

    http.post.assert_awaited_once_with(
        "http://rpc",
        json={"jsonrpc": "2.0", "id": 1, "method": "eth_blockNumber", "params": []},
    )


async def test_call_raises_on_error_object() -> None:
    client, _ = _rpc({"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}})

    with pytest.raises(RpcError) as exc_info:
        await client.call("eth_call", [{}, "latest"])

    assert exc_info.value.code == -32000
    assert exc_info.value.method == "eth_call"


async def test_call_raises_when_result_missing() -> None:
    client, _ = _rpc({"jsonrpc": "2.0", "id": 1})

    with pytest.raises(RpcError):
        await client.gas_price()


async def test_chain_id_is_cached() -> None:
    client, http = _rpc({"result": "0x89"})

    assert await client.chain_id() == 137
    assert await client.chain_id() == 137
    assert http.post.await_count == 1


async def test_get_logs_builds_hex_range_filter() -> None:
    client, http = _rpc({"result": []})

    logs = await client.get_logs(from_block=101, to_block=110, topics=["0xtopic", None, "0xwallet"])

    assert logs == []
    sent = http.post.await_args.kwargs["json"]
    assert sent["method"] == "eth_getLogs"
    assert sent["params"] == [
        {"fromBlock": "0x65", "toBlock": "0x6e", "topics": ["0xtopic", None, "0xwallet"]}
    ]


async def test_eth_call_returns_0x_for_null_result() -> None:
    client, _ = _rpc({"result": None})

    assert await client.eth_call("0xabc", "0x95d89b41") == "0x"


async def test_wait_for_receipt_polls_until_mined() -> None:
    sleep = AsyncMock()
    receipt = {"status": "0x1", "blockNumber": "0x5"}
    client, _ = _rpc({"result": None}, {"result": None}, {"result": receipt}, sleep=sleep)

    assert await client.wait_for_receipt("0xhash", poll_seconds=2.0) == receipt
    assert sleep.await_count == 2
    sleep.assert_awaited_with(2.0)


async def test_wait_for_receipt_times_out() -> None:
    client, _ = _rpc({"result": None}, {"result": None}, {"result": None})

    with pytest.raises(ReceiptTimeoutError):
        await client.wait_for_receipt("0xhash", poll_seconds=0.0, timeout_seconds=0.0)


async def test_aclose_closes_http_client() -> None:
    client, http = _rpc()

    await client.aclose()

    http.aclose.assert_awaited_once()


async def test_get_transaction_by_hash_returns_none_for_unknown_hash() -> None:
    client, http = _rpc({"result": None}, {"result": {"hash": "0xhash", "blockNumber": None}})

    assert await client.get_transaction_by_hash("0xhash") is None
    assert await client.get_transaction_by_hash("0xhash") == {"hash": "0xhash", "blockNumber": None}
    assert http.post.await_args.kwargs["json"]["method"] == "eth_getTransactionByHash"
