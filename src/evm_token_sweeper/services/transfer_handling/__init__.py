"""Incoming transfer handling."""

from evm_token_sweeper.services.transfer_handling.incoming_transfer_handler import (
    IncomingTransferHandler,
)

__all__ = ["IncomingTransferHandler"]
