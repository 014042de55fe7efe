"""ERC-20 call encoding and decoding on top of RpcClient."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import to_checksum_address

if TYPE_CHECKING:
    from evm_token_sweeper.clients.rpc_client.rpc_client import RpcClient

# ERC-20 selectors (bytes4(keccak256(...)))
SELECTOR_BALANCE_OF = "0x70a08231"
SELECTOR_DECIMALS = "0x313ce567"
SELECTOR_SYMBOL = "0x95d89b41"
SELECTOR_NAME = "0x06fdde03"
SELECTOR_TRANSFER = "0xa9059cbb"

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def _normalize_address(addr: str) -> str:
    """Return lowercase hex address without 0x prefix (for calldata)."""
    s = (addr or "").strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    if len(s) != 40:
        raise ValueError(f"Invalid address length: {addr!r}")
    return s


def address_topic(addr: str) -> str:
    """Left-pad an address to a 32-byte indexed topic."""
    return "0x" + "0" * 24 + _normalize_address(addr)


def _result_bytes(raw: str) -> bytes:
    s = (raw or "").strip()
    if s.startswith("0x"):
        s = s[2:]
    if not s:
        raise ValueError("empty eth_call result (not a contract or function missing)")
    return bytes.fromhex(s)


def decode_uint(raw: str) -> int:
    """Decode a uint eth_call result."""
    data = _result_bytes(raw)
    return int.from_bytes(data[:32], "big")


def decode_text(raw: str) -> str:
    """Decode a string eth_call result; legacy bytes32 returns (e.g. MKR) are accepted too."""
    data = _result_bytes(raw)
    if len(data) == 32:
        return data.rstrip(b"\x00").decode("utf-8", errors="replace")
    (value,) = abi_decode(["string"], data)
    return str(value)


def encode_balance_of(owner: str) -> str:
    # balanceOf(address): selector + uint256 (padded address, 32 bytes)
    return SELECTOR_BALANCE_OF + "0" * 24 + _normalize_address(owner)


def encode_transfer(to: str, amount: int) -> str:
    """Calldata for transfer(to, amount)."""
    if amount < 0:
        raise ValueError("amount must be >= 0")
    args = abi_encode(["address", "uint256"], [to_checksum_address(to), amount])
    return SELECTOR_TRANSFER + args.hex()


class Erc20Token:
    """Read-only view of one ERC-20 contract through an RpcClient."""

    def __init__(self, rpc: RpcClient, address: str) -> None:
        self._rpc = rpc
        self.address = address.strip().lower()

    async def symbol(self) -> str:
        return decode_text(await self._rpc.eth_call(self.address, SELECTOR_SYMBOL))

    async def name(self) -> str:
        return decode_text(await self._rpc.eth_call(self.address, SELECTOR_NAME))

    async def decimals(self) -> int:
        value = decode_uint(await self._rpc.eth_call(self.address, SELECTOR_DECIMALS))
        if value > 255:
            raise ValueError(f"decimals out of range: {value}")
        return value

    async def balance_of(self, owner: str) -> int:
        """Raw (unscaled) balance of owner."""
        return decode_uint(await self._rpc.eth_call(self.address, encode_balance_of(owner)))
