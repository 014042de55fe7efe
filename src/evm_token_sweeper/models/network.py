"""NetworkConfig: one monitored EVM network."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Name and JSON-RPC endpoint of a monitored network. Supplied once at startup."""

    name: str
    """Human-readable network name (e.g. Ethereum, Base)."""
    rpc_url: str
    """HTTP(S) JSON-RPC endpoint."""
