# -*- coding: utf-8 -*-
"""Unit tests for MonitorState and TokenDetails."""

from __future__ import annotations

import pytest

from evm_token_sweeper.models.monitor_state import MonitorState
from evm_token_sweeper.models.token import TokenDetails


def test_advance_to_moves_forward_only() -> None:
    state = MonitorState(last_checked_block=100)

    assert state.advance_to(105) is True
    assert state.advance_to(105) is False
    assert state.advance_to(90) is False
    assert state.last_checked_block == 105


async def test_each_state_gets_its_own_ledger() -> None:
    first = MonitorState(last_checked_block=1)
    second = MonitorState(last_checked_block=1)

    await first.ledger.mark_processed("0xabc")

    assert await second.ledger.has_processed("0xabc") is False


def test_token_details_defaults() -> None:
    details = TokenDetails()

    assert (details.symbol, details.decimals, details.name) == ("UNKNOWN", 18, "Unknown Token")


def test_token_details_format_amount() -> None:
    assert TokenDetails(symbol="USDC", decimals=6, name="USD Coin").format_amount(1000) == "0.001"


def test_token_details_rejects_negative_decimals() -> None:
    with pytest.raises(ValueError):
        TokenDetails(decimals=-1)
