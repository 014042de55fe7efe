"""TransferLogEntry: one ERC-20 Transfer log addressed to the watched wallet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _to_int(value: Any) -> int:
    """Parse a JSON-RPC quantity (0x-hex string or int)."""
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value:
        return int(value, 16) if value.lower().startswith("0x") else int(value)
    raise ValueError(f"Invalid quantity: {value!r}")


def _topic_address(topic: Any) -> str | None:
    """Return the lower-cased address held in the low 20 bytes of an indexed topic."""
    if not isinstance(topic, str) or len(topic) < 42:
        return None
    return "0x" + topic[-40:].lower()


@dataclass(frozen=True, slots=True)
class TransferLogEntry:
    """Decoded `Transfer(address,address,uint256)` log. Read-only, handled once."""

    transaction_hash: str
    """Hash of the transaction that emitted the log (dedup key)."""
    token_address: str
    """Lower-cased address of the emitting token contract."""
    block_number: int
    """Block the log was included in."""
    log_index: int = 0
    """Position of the log inside the block."""
    from_address: str | None = None
    """Sender decoded from topic 1, if present."""
    to_address: str | None = None
    """Recipient decoded from topic 2, if present."""
    amount_raw: int | None = None
    """Transferred amount from the data field; None when the data is not a uint256."""

    @classmethod
    def from_rpc_log(cls, log: dict[str, Any]) -> TransferLogEntry:
        """Build an entry from an eth_getLogs result item.

        Raises:
            ValueError: If transactionHash, address or blockNumber is missing or malformed.
        """
        tx_hash = log.get("transactionHash")
        address = log.get("address")
        if not isinstance(tx_hash, str) or not tx_hash:
            raise ValueError("log has no transactionHash")
        if not isinstance(address, str) or not address:
            raise ValueError("log has no address")
        topics = log.get("topics") or []
        data = log.get("data")
        amount_raw: int | None = None
        if isinstance(data, str) and len(data) == 66:
            amount_raw = int(data, 16)
        return cls(
            transaction_hash=tx_hash,
            token_address=address.lower(),
            block_number=_to_int(log.get("blockNumber")),
            log_index=_to_int(log.get("logIndex", 0)),
            from_address=_topic_address(topics[1]) if len(topics) > 1 else None,
            to_address=_topic_address(topics[2]) if len(topics) > 2 else None,
            amount_raw=amount_raw,
        )
