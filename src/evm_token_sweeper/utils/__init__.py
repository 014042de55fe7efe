# -*- coding: utf-8 -*-
"""Utility modules."""

from evm_token_sweeper.utils.units import format_units
from evm_token_sweeper.utils.validation import (
    is_hex_address,
    mask_address,
    parse_token_addresses,
)

__all__ = ["format_units", "is_hex_address", "mask_address", "parse_token_addresses"]
