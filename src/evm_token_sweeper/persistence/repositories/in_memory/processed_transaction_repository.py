# -*- coding: utf-8 -*-
"""In-memory dedup ledger (set of transaction hashes)."""

from __future__ import annotations

from evm_token_sweeper.persistence.repositories.interfaces.processed_transaction_repository import (
    IProcessedTransactionRepository,
)


def _key(tx_hash: str) -> str:
    """Normalize key for storage (hashes are case-insensitive hex)."""
    return tx_hash.strip().lower()


class InMemoryProcessedTransactionRepository(IProcessedTransactionRepository):
    """In-memory implementation of IProcessedTransactionRepository.

    Grows for the lifetime of its monitor session and is never pruned or
    persisted; a monitor restart starts from an empty ledger.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: set[str] = set()

    async def has_processed(self, tx_hash: str) -> bool:
        return _key(tx_hash) in self._store

    async def mark_processed(self, tx_hash: str) -> None:
        self._store.add(_key(tx_hash))

    def __len__(self) -> int:
        return len(self._store)
