"""Validation helpers for addresses and private keys."""

from __future__ import annotations

from typing import Any


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is a valid 0x wallet address (42 chars, case-insensitive)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    if len(s) != 42:
        return False
    if not s[:2].lower() == "0x":
        return False
    try:
        int(s[2:], 16)
        return True
    except ValueError:
        return False


def parse_token_addresses(raw: str | None) -> list[str]:
    """Split a comma-separated token list into lower-cased addresses.

    Entries are trimmed and lower-cased; anything that is not a 42-char 0x hex
    address is dropped. Order is preserved, duplicates are kept once.
    """
    if not raw or not raw.strip():
        return []
    tokens: list[str] = []
    for part in raw.split(","):
        addr = part.strip().lower()
        if is_hex_address(addr) and addr not in tokens:
            tokens.append(addr)
    return tokens


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
