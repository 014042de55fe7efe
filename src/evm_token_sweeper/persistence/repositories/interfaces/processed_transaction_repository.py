"""Abstract interface for the dedup ledger of handled transactions."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IProcessedTransactionRepository(ABC):
    """Interface for recording transaction hashes whose transfers were already handled."""

    @abstractmethod
    async def has_processed(self, tx_hash: str) -> bool:
        """Return True if tx_hash has been marked processed."""
        ...

    @abstractmethod
    async def mark_processed(self, tx_hash: str) -> None:
        """Record tx_hash as processed. Idempotent (re-marking is a no-op)."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Number of recorded transaction hashes."""
        ...
