"""MonitorState: checkpoint and dedup ledger of one network monitor session."""

from __future__ import annotations

from dataclasses import dataclass, field

from evm_token_sweeper.persistence.repositories.in_memory.processed_transaction_repository import (
    InMemoryProcessedTransactionRepository,
)
from evm_token_sweeper.persistence.repositories.interfaces.processed_transaction_repository import (
    IProcessedTransactionRepository,
)


@dataclass(slots=True)
class MonitorState:
    """Mutable state owned by exactly one monitor session.

    A restart builds a new MonitorState, so the checkpoint and the ledger never
    outlive the session that created them.
    """

    last_checked_block: int
    """Highest block whose transfer logs have all been handled."""
    ledger: IProcessedTransactionRepository = field(
        default_factory=InMemoryProcessedTransactionRepository
    )

    def advance_to(self, block: int) -> bool:
        """Move the checkpoint forward. Returns False (no change) if block is not ahead."""
        if block <= self.last_checked_block:
            return False
        self.last_checked_block = block
        return True
