"""Persistence layer (repositories)."""

from evm_token_sweeper.persistence.repositories import (
    IProcessedTransactionRepository,
    InMemoryProcessedTransactionRepository,
)

__all__ = [
    "IProcessedTransactionRepository",
    "InMemoryProcessedTransactionRepository",
]
