# -*- coding: utf-8 -*-
"""Unit tests for WalletIdentity."""

from __future__ import annotations

import pytest
from eth_account import Account
from eth_utils import keccak, to_hex

from evm_token_sweeper.models.wallet import WalletIdentity


def test_from_private_key_derives_lowercase_address(private_key: str) -> None:
    wallet = WalletIdentity.from_private_key(private_key)

    assert wallet.address == "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
    assert wallet.checksum_address == "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


def test_from_private_key_accepts_key_without_prefix(private_key: str) -> None:
    wallet = WalletIdentity.from_private_key(private_key[2:])

    assert wallet.address == "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"


@pytest.mark.parametrize("key", ["", "   ", "0x1234", "zz" * 32])
def test_from_private_key_rejects_malformed_key(key: str) -> None:
    with pytest.raises(ValueError):
        WalletIdentity.from_private_key(key)


def test_private_key_not_in_repr(private_key: str) -> None:
    wallet = WalletIdentity.from_private_key(private_key)

    assert private_key[2:] not in repr(wallet)


def test_sign_transaction_is_recoverable(wallet: WalletIdentity) -> None:
    tx = {
        "to": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "value": 0,
        "data": "0xa9059cbb",
        "nonce": 0,
        "gas": 60_000,
        "gasPrice": 1_000_000_000,
        "chainId": 1,
    }

    signed = wallet.sign_transaction(tx)

    assert signed.raw_transaction.startswith("0x")
    assert Account.recover_transaction(signed.raw_transaction).lower() == wallet.address
    assert signed.transaction_hash == to_hex(keccak(hexstr=signed.raw_transaction))
