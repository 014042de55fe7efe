# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory)."""

from evm_token_sweeper.persistence.repositories.interfaces import (
    IProcessedTransactionRepository,
)
from evm_token_sweeper.persistence.repositories.in_memory import (
    InMemoryProcessedTransactionRepository,
)

__all__ = [
    "IProcessedTransactionRepository",
    "InMemoryProcessedTransactionRepository",
]
