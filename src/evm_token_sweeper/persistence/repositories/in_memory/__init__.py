"""In-memory repository implementations."""

from evm_token_sweeper.persistence.repositories.in_memory.processed_transaction_repository import (
    InMemoryProcessedTransactionRepository,
)

__all__ = ["InMemoryProcessedTransactionRepository"]
