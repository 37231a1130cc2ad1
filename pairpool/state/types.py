"""
Shared type aliases and argument guards.

Amounts are arbitrary-precision ints in fixed-point units. Bools and floats
are rejected everywhere an amount is accepted.
"""

from __future__ import annotations

Owner = str  # opaque caller / account identity
AssetId = str  # asset (token) identifier
Amount = int  # non-negative integer in fixed-point units


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def require_non_negative(name: str, value: int) -> None:
    require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def require_identifier(name: str, value: str) -> None:
    """Owners, assets and accounts are non-empty strings."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
