# -*- coding: utf-8 -*-
"""Unit tests for format_units."""

from __future__ import annotations

import pytest

from evm_token_sweeper.utils import format_units


@pytest.mark.parametrize(
    ("amount", "decimals", "expected"),
    [
        (1000, 6, "0.001"),
        (5 * 10**18, 18, "5.0"),
        (1_500_000, 6, "1.5"),
        (1, 18, "0.000000000000000001"),
        (1000, 0, "1000.0"),
        (0, 18, "0.0"),
    ],
)
def test_format_units(amount: int, decimals: int, expected: str) -> None:
    assert format_units(amount, decimals) == expected


def test_format_units_rejects_negative_decimals() -> None:
    with pytest.raises(ValueError):
        format_units(1, -1)
