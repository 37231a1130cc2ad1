"""Invariant checkers for a pool's ledger.

Each function returns True when the invariant holds for the candidate
(reserves, shares) pair, and `check_all()` returns the list of violated
invariant IDs (empty = all pass). `PoolState` runs `check_all()` on every
candidate post-state before committing it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Mapping

if TYPE_CHECKING:
    from .pool import PoolReserves


def inv_share_conservation(r: PoolReserves, shares: Mapping[str, int]) -> bool:
    return sum(shares.values()) == r.total_shares


def inv_empty_iff_unseeded(r: PoolReserves, shares: Mapping[str, int]) -> bool:
    unseeded = r.total_shares == 0
    empty = r.reserve_a == 0 and r.reserve_b == 0
    return unseeded == empty


def inv_reserves_positive_when_seeded(r: PoolReserves, shares: Mapping[str, int]) -> bool:
    if r.total_shares == 0:
        return True
    return r.reserve_a > 0 and r.reserve_b > 0


def inv_non_negative(r: PoolReserves, shares: Mapping[str, int]) -> bool:
    if r.reserve_a < 0 or r.reserve_b < 0 or r.total_shares < 0:
        return False
    return all(v >= 0 for v in shares.values())


InvariantFn = Callable[["PoolReserves", Mapping[str, int]], bool]

INVARIANT_REGISTRY: dict[str, InvariantFn] = {
    "inv_share_conservation": inv_share_conservation,
    "inv_empty_iff_unseeded": inv_empty_iff_unseeded,
    "inv_reserves_positive_when_seeded": inv_reserves_positive_when_seeded,
    "inv_non_negative": inv_non_negative,
}


def check_all(r: PoolReserves, shares: Mapping[str, int]) -> list[str]:
    """Return the IDs of every violated invariant, in registry order."""
    return [name for name, fn in INVARIANT_REGISTRY.items() if not fn(r, shares)]
