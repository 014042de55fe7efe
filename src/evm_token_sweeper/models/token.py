"""TokenDetails: display metadata of an ERC-20 contract."""

from __future__ import annotations

from dataclasses import dataclass

from evm_token_sweeper.utils.units import format_units

DEFAULT_SYMBOL = "UNKNOWN"
DEFAULT_DECIMALS = 18
DEFAULT_NAME = "Unknown Token"


@dataclass(frozen=True, slots=True)
class TokenDetails:
    """Symbol, decimals and name of a token contract.

    Each field falls back to its default independently when the contract does
    not answer, so a TokenDetails is always usable for display and formatting.
    """

    symbol: str = DEFAULT_SYMBOL
    decimals: int = DEFAULT_DECIMALS
    name: str = DEFAULT_NAME

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError("decimals must be >= 0")

    def format_amount(self, amount_raw: int) -> str:
        """Format a raw amount with this token's decimals (1000 @ 6 -> "0.001")."""
        return format_units(amount_raw, self.decimals)
