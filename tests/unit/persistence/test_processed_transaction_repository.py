# -*- coding: utf-8 -*-
"""Unit tests for InMemoryProcessedTransactionRepository."""

from __future__ import annotations

from evm_token_sweeper.persistence.repositories.in_memory.processed_transaction_repository import (
    InMemoryProcessedTransactionRepository,
)


async def test_unknown_hash_is_not_processed(
    ledger: InMemoryProcessedTransactionRepository,
) -> None:
    assert await ledger.has_processed("0x" + "01" * 32) is False
    assert len(ledger) == 0


async def test_mark_processed_is_case_insensitive(
    ledger: InMemoryProcessedTransactionRepository,
) -> None:
    await ledger.mark_processed("0xABCDEF")

    assert await ledger.has_processed("0xabcdef") is True
    assert await ledger.has_processed(" 0xAbCdEf ") is True


async def test_mark_processed_twice_keeps_one_entry(
    ledger: InMemoryProcessedTransactionRepository,
) -> None:
    await ledger.mark_processed("0xabc")
    await ledger.mark_processed("0xABC")

    assert len(ledger) == 1
