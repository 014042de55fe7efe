# -*- coding: utf-8 -*-
"""Unit tests for ERC-20 calldata encoding and result decoding."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, cast

import pytest

from evm_token_sweeper.clients.rpc_client.erc20 import (
    Erc20Token,
    address_topic,
    decode_text,
    decode_uint,
    encode_balance_of,
    encode_transfer,
)

RECIPIENT = "0x1111111111111111111111111111111111111111"


def test_address_topic_left_pads_to_32_bytes() -> None:
    topic = address_topic("0x2C7536E3605D9C16A7A3D7B1898E529396A65C23")

    assert topic == "0x" + "0" * 24 + "2c7536e3605d9c16a7a3d7b1898e529396a65c23"
    assert len(topic) == 66


def test_encode_balance_of() -> None:
    assert encode_balance_of(RECIPIENT) == "0x70a08231" + "0" * 24 + "1" * 40


def test_encode_transfer_layout() -> None:
    data = encode_transfer(RECIPIENT, 1000)

    assert data.startswith("0xa9059cbb")
    assert data[10:74] == "0" * 24 + "1" * 40
    assert int(data[74:], 16) == 1000


def test_encode_transfer_rejects_negative_amount() -> None:
    with pytest.raises(ValueError):
        encode_transfer(RECIPIENT, -1)


def test_decode_uint_and_empty_result() -> None:
    assert decode_uint("0x" + (6).to_bytes(32, "big").hex()) == 6
    with pytest.raises(ValueError):
        decode_uint("0x")


def test_decode_text_accepts_bytes32_symbol() -> None:
    raw = "0x" + b"MKR".ljust(32, b"\x00").hex()

    assert decode_text(raw) == "MKR"


async def test_token_reads_metadata_and_balance(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    token_address: str,
) -> None:
    rpc = fake_rpc_factory(
        balances={token_address: 1000},
        metadata={token_address: ("USDC", 6, "USD Coin")},
    )
    token = Erc20Token(cast(Any, rpc), token_address.upper().replace("0X", "0x"))

    assert token.address == token_address
    assert await token.symbol() == "USDC"
    assert await token.name() == "USD Coin"
    assert await token.decimals() == 6
    assert await token.balance_of(RECIPIENT) == 1000


async def test_token_decimals_out_of_range(
    fake_rpc_factory: Callable[..., SimpleNamespace],
    token_address: str,
) -> None:
    rpc = fake_rpc_factory(metadata={token_address: ("BAD", 300, "Bad")})

    with pytest.raises(ValueError):
        await Erc20Token(cast(Any, rpc), token_address).decimals()
