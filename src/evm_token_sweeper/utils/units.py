"""Token amount formatting."""

from __future__ import annotations


def format_units(amount: int, decimals: int) -> str:
    """Render a raw integer token amount as a decimal string.

    Always keeps at least one fractional digit and never uses exponent notation:
    ``format_units(1000, 6) == "0.001"``, ``format_units(5 * 10**18, 18) == "5.0"``.
    """
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{frac_str or '0'}"
