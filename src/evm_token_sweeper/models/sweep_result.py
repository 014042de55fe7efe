"""Result of a single sweep attempt."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SweepOutcome(StrEnum):
    """What a sweep attempt ended with."""

    SWEPT = "swept"
    NO_BALANCE = "no_balance"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SweepResult:
    """Outcome of SweepExecutor.sweep for one token."""

    outcome: SweepOutcome
    token_address: str
    amount_raw: int = 0
    amount: str | None = None
    transaction_hash: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """True when a transfer was confirmed on chain."""
        return self.outcome is SweepOutcome.SWEPT

    @classmethod
    def swept(cls, token_address: str, amount_raw: int, amount: str, transaction_hash: str) -> SweepResult:
        return cls(
            outcome=SweepOutcome.SWEPT,
            token_address=token_address,
            amount_raw=amount_raw,
            amount=amount,
            transaction_hash=transaction_hash,
        )

    @classmethod
    def no_balance(cls, token_address: str) -> SweepResult:
        return cls(outcome=SweepOutcome.NO_BALANCE, token_address=token_address)

    @classmethod
    def failed(
        cls,
        token_address: str,
        error: str,
        *,
        amount_raw: int = 0,
        amount: str | None = None,
        transaction_hash: str | None = None,
    ) -> SweepResult:
        return cls(
            outcome=SweepOutcome.FAILED,
            token_address=token_address,
            amount_raw=amount_raw,
            amount=amount,
            transaction_hash=transaction_hash,
            error=error,
        )
