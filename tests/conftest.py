# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from evm_token_sweeper.clients.rpc_client.erc20 import (
    SELECTOR_BALANCE_OF,
    SELECTOR_DECIMALS,
    SELECTOR_NAME,
    SELECTOR_SYMBOL,
)
from evm_token_sweeper.models.wallet import WalletIdentity
from evm_token_sweeper.persistence.repositories.in_memory.processed_transaction_repository import (
    InMemoryProcessedTransactionRepository,
)

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
WALLET_ADDRESS = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
RECIPIENT = "0x1111111111111111111111111111111111111111"
TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


def uint_result(value: int) -> str:
    """eth_call result for a uint256 return value."""
    return "0x" + value.to_bytes(32, "big").hex()


def string_result(value: str) -> str:
    """eth_call result for an ABI-encoded string return value."""
    data = value.encode("utf-8")
    padded = data + b"\x00" * (-len(data) % 32)
    return (
        "0x"
        + (32).to_bytes(32, "big").hex()
        + len(data).to_bytes(32, "big").hex()
        + padded.hex()
    )


@pytest.fixture
def private_key() -> str:
    """Well-known test private key (never funded)."""
    return PRIVATE_KEY


@pytest.fixture
def wallet() -> WalletIdentity:
    """Watched wallet derived from the test key."""
    return WalletIdentity.from_private_key(PRIVATE_KEY)


@pytest.fixture
def recipient() -> str:
    """Default sweep recipient used by tests."""
    return RECIPIENT


@pytest.fixture
def token_address() -> str:
    """Default token contract used by tests."""
    return TOKEN


@pytest.fixture
def settings_factory() -> Callable[..., Any]:
    """Build a settings stand-in with the sections the monitor code reads."""

    def _build(**overrides: Any) -> Any:
        return SimpleNamespace(
            wallet=SimpleNamespace(
                private_key=overrides.pop("private_key", PRIVATE_KEY),
                recipient_address=overrides.pop("recipient_address", RECIPIENT),
                custom_tokens=overrides.pop("custom_tokens", []),
            ),
            monitor=SimpleNamespace(
                poll_seconds=overrides.pop("poll_seconds", 15.0),
                settling_delay_seconds=overrides.pop("settling_delay_seconds", 60.0),
                restart_delay_seconds=overrides.pop("restart_delay_seconds", 30.0),
                receipt_poll_seconds=overrides.pop("receipt_poll_seconds", 2.0),
                receipt_timeout_seconds=overrides.pop("receipt_timeout_seconds", None),
            ),
        )

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Any]) -> Any:
    """Settings stand-in with default timings."""
    return settings_factory()


@pytest.fixture
def fake_rpc_factory() -> Callable[..., SimpleNamespace]:
    """Build an RpcClient stand-in answering ERC-20 eth_calls from plain values.

    balances maps lower-cased token address to raw balance; a token missing from
    balances reads as zero. metadata maps token address to (symbol, decimals, name).
    """

    def _build(
        *,
        balances: dict[str, int] | None = None,
        metadata: dict[str, tuple[str, int, str]] | None = None,
        block_number: int = 100,
        receipt: dict[str, Any] | None = None,
    ) -> SimpleNamespace:
        balances_ = {k.lower(): v for k, v in (balances or {}).items()}
        metadata_ = {k.lower(): v for k, v in (metadata or {}).items()}

        async def eth_call(to: str, data: str, block: str = "latest") -> str:
            token = to.lower()
            if data.startswith(SELECTOR_BALANCE_OF):
                return uint_result(balances_.get(token, 0))
            if token not in metadata_:
                return "0x"
            symbol, decimals, name = metadata_[token]
            if data == SELECTOR_SYMBOL:
                return string_result(symbol)
            if data == SELECTOR_DECIMALS:
                return uint_result(decimals)
            if data == SELECTOR_NAME:
                return string_result(name)
            return "0x"

        return SimpleNamespace(
            eth_call=AsyncMock(side_effect=eth_call),
            block_number=AsyncMock(return_value=block_number),
            get_logs=AsyncMock(return_value=[]),
            get_transaction_count=AsyncMock(return_value=7),
            gas_price=AsyncMock(return_value=2_000_000_000),
            chain_id=AsyncMock(return_value=1),
            estimate_gas=AsyncMock(return_value=52_000),
            send_raw_transaction=AsyncMock(return_value="0x" + "ab" * 32),
            get_transaction_by_hash=AsyncMock(return_value=None),
            wait_for_receipt=AsyncMock(
                return_value=receipt if receipt is not None else {"status": "0x1", "blockNumber": "0x65"}
            ),
            aclose=AsyncMock(),
        )

    return _build


@pytest.fixture
def fake_bus() -> SimpleNamespace:
    """Event bus stand-in recording dispatched events."""
    return SimpleNamespace(dispatch=MagicMock())


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="EvmTokenSweeperTests",
        max_history_size=200,
        wal_path=None,
    )


@pytest.fixture
def ledger() -> InMemoryProcessedTransactionRepository:
    """Fresh in-memory dedup ledger per test."""
    return InMemoryProcessedTransactionRepository()


@pytest.fixture
def dispatched(fake_bus: SimpleNamespace) -> Callable[[type[Any]], list[Any]]:
    """Events of a given type passed to fake_bus.dispatch, in order."""

    def _events(event_type: type[Any]) -> list[Any]:
        return [c.args[0] for c in fake_bus.dispatch.call_args_list if isinstance(c.args[0], event_type)]

    return _events
