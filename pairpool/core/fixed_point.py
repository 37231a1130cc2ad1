"""
Fixed-point helpers for pool amounts.

All amounts are plain Python ints interpreted at a fixed scale of
`10**DECIMALS` units per whole token (18 decimals, ERC-20 style).
No floats are accepted anywhere: conversions from text go through exact
decimal parsing.

Rounding conventions:
- `mul_div_floor` is used for every amount paid *out* by the pool.
- `mul_div_ceil` is used only where rounding up keeps value in the pool.
"""

from __future__ import annotations

import re
from typing import Union

from ..state.types import require_int, require_non_negative

DECIMALS = 18
SCALE = 10**DECIMALS

_DECIMAL_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) for non-negative operands."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive: {denominator}")
    if a < 0 or b < 0:
        raise ValueError(f"operands must be non-negative: ({a}, {b})")
    return (a * b) // denominator


def mul_div_ceil(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator) for non-negative operands."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive: {denominator}")
    if a < 0 or b < 0:
        raise ValueError(f"operands must be non-negative: ({a}, {b})")
    return (a * b + denominator - 1) // denominator


def to_units(value: Union[int, str], decimals: int = DECIMALS) -> int:
    """
    Convert a whole-token quantity to fixed-point units.

    `to_units(100)` == 100 * 10**18; `to_units("0.5")` == 5 * 10**17.
    Strings with more fractional digits than `decimals` are rejected rather
    than silently truncated.
    """
    require_non_negative("decimals", decimals)
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError("to_units accepts int or decimal str only")
    if isinstance(value, int):
        return value * 10**decimals
    if not isinstance(value, str):
        raise TypeError(f"to_units accepts int or decimal str, got {type(value).__name__}")

    text = value.strip().replace("_", "")
    if not _DECIMAL_RE.match(text):
        raise ValueError(f"invalid decimal amount: {value!r}")
    whole, _, frac = text.partition(".")
    if len(frac) > decimals:
        raise ValueError(f"{value!r} has more than {decimals} fractional digits")
    return int(whole or "0") * 10**decimals + int(frac.ljust(decimals, "0") or "0")


def format_units(amount: int, decimals: int = DECIMALS) -> str:
    """Render fixed-point units as a decimal string (`formatEther` style)."""
    require_int("amount", amount)
    require_non_negative("decimals", decimals)
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)
    if decimals == 0:
        return f"{sign}{whole}"
    frac_s = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_s}"
