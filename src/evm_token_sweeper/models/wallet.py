"""WalletIdentity: address and signing key of the watched wallet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex


@dataclass(frozen=True, slots=True)
class SignedTransaction:
    """Raw signed transaction and the hash it will have on chain."""

    raw_transaction: str
    transaction_hash: str


@dataclass(frozen=True, slots=True)
class WalletIdentity:
    """Watched wallet bound to one network session.

    The same private key is used by every network; each monitor derives its own
    instance at startup.
    """

    address: str
    """Lower-cased 0x address."""
    _account: LocalAccount = field(repr=False)

    @classmethod
    def from_private_key(cls, private_key: str) -> WalletIdentity:
        """Derive the wallet from a hex private key (0x prefix optional).

        Raises:
            ValueError: If the key is empty or not a valid secp256k1 private key.
        """
        key = (private_key or "").strip()
        if not key:
            raise ValueError("private key is empty")
        try:
            account: LocalAccount = Account.from_key(key)
        except Exception as e:
            raise ValueError(f"invalid private key: {type(e).__name__}") from e
        return cls(address=account.address.lower(), _account=account)

    @property
    def checksum_address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: dict[str, Any]) -> SignedTransaction:
        """Sign a transaction dict; raw bytes and hash are returned as 0x-hex."""
        signed = self._account.sign_transaction(tx)
        return SignedTransaction(
            raw_transaction=to_hex(signed.raw_transaction),
            transaction_hash=to_hex(signed.hash),
        )
