"""
Pool state for a two-asset constant-product pool.

`PoolState` owns the reserves, the total share count and the per-owner share
ledger. Outside code never writes fields directly: every change goes through
one of the `apply_*` mutators, which build the candidate post-state, run the
invariant checks and only then commit it.

Reserves and shares are committed together as one immutable snapshot with a
single attribute assignment, so lock-free readers always see a consistent
(reserves, shares) pair.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..errors import PoolInvariantError, ReentrantCall
from .canonical import sha256_hex
from .invariants import check_all
from .shares import ShareTable
from .types import Amount, AssetId, Owner, require_identifier, require_non_negative


class PoolStatus(Enum):
    """Pool lifecycle state."""
    EMPTY = "EMPTY"
    SEEDED = "SEEDED"


class SwapDirection(Enum):
    """Which reserve receives the input of a swap."""
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


@dataclass(frozen=True)
class PoolReserves:
    """Immutable snapshot of the pool's scalar quantities."""
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    total_shares: Amount = 0

    @property
    def product(self) -> int:
        """Constant product k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def oriented(self, direction: SwapDirection) -> Tuple[Amount, Amount]:
        """Return (reserve_in, reserve_out) for a swap in `direction`."""
        if direction is SwapDirection.A_TO_B:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a


@dataclass(frozen=True)
class PoolCheckpoint:
    """Saved ledger contents used to roll back a failed operation."""
    reserves: PoolReserves
    shares: Dict[Owner, Amount] = field(default_factory=dict)


def compute_pool_account(asset_a: AssetId, asset_b: AssetId) -> str:
    """
    Deterministic ledger identity for the pool holding (asset_a, asset_b).

        account = "0x" || sha256("PairPool" || asset_a || "|" || asset_b)
    """
    data = b"PairPool" + asset_a.encode("utf-8") + b"|" + asset_b.encode("utf-8")
    return sha256_hex(data)


class PoolState:
    """
    Ledger of a single two-asset pool.

    Attributes:
        asset_a: First asset identifier (immutable)
        asset_b: Second asset identifier (immutable, != asset_a)
        account: Identity of the pool on the external ledgers
    """

    def __init__(self, asset_a: AssetId, asset_b: AssetId, *, account: Optional[str] = None) -> None:
        require_identifier("asset_a", asset_a)
        require_identifier("asset_b", asset_b)
        if asset_a == asset_b:
            raise ValueError(f"Pool assets must be distinct: {asset_a}")
        if account is not None:
            require_identifier("account", account)

        self._asset_a = asset_a
        self._asset_b = asset_b
        self._account = account if account is not None else compute_pool_account(asset_a, asset_b)
        self._ledger: Tuple[PoolReserves, Mapping[Owner, Amount]] = (PoolReserves(), MappingProxyType({}))
        self._lock = threading.RLock()
        self._in_progress = False

    # -- read accessors ---------------------------------------------------

    @property
    def asset_a(self) -> AssetId:
        return self._asset_a

    @property
    def asset_b(self) -> AssetId:
        return self._asset_b

    @property
    def account(self) -> str:
        return self._account

    @property
    def reserve_a(self) -> Amount:
        return self._ledger[0].reserve_a

    @property
    def reserve_b(self) -> Amount:
        return self._ledger[0].reserve_b

    @property
    def total_shares(self) -> Amount:
        return self._ledger[0].total_shares

    def reserves(self) -> PoolReserves:
        return self._ledger[0]

    def share_of(self, owner: Owner) -> Amount:
        return self._ledger[1].get(owner, 0)

    def shares(self) -> Dict[Owner, Amount]:
        """Copy of all non-zero share balances."""
        return dict(self._ledger[1])

    @property
    def status(self) -> PoolStatus:
        return PoolStatus.SEEDED if self.total_shares > 0 else PoolStatus.EMPTY

    @property
    def is_seeded(self) -> bool:
        return self.status is PoolStatus.SEEDED

    @property
    def in_progress(self) -> bool:
        """True while a mutating operation holds the pool."""
        return self._in_progress

    def asset_for(self, direction: SwapDirection) -> Tuple[AssetId, AssetId]:
        """Return (asset_given, asset_received) for a swap in `direction`."""
        if direction is SwapDirection.A_TO_B:
            return self._asset_a, self._asset_b
        return self._asset_b, self._asset_a

    # -- operation guard / rollback --------------------------------------

    @contextmanager
    def exclusive(self) -> Iterator["PoolState"]:
        """
        Serialize a mutating operation on this pool.

        Other threads block on the lock; a re-entrant mutation from the thread
        already inside the operation (e.g. from a ledger callback) is rejected.
        """
        with self._lock:
            if self._in_progress:
                raise ReentrantCall("pool is already executing a mutating operation")
            self._in_progress = True
            try:
                yield self
            finally:
                self._in_progress = False

    def checkpoint(self) -> PoolCheckpoint:
        reserves, shares = self._ledger
        return PoolCheckpoint(reserves=reserves, shares=dict(shares))

    def restore(self, checkpoint: PoolCheckpoint) -> None:
        self._commit(checkpoint.reserves, ShareTable(checkpoint.shares))

    # -- invariant-preserving mutators ------------------------------------

    def apply_deposit(self, provider: Owner, amount_a: Amount, amount_b: Amount, shares_minted: Amount) -> None:
        """Credit both reserves and mint `shares_minted` to `provider`."""
        require_identifier("provider", provider)
        require_non_negative("amount_a", amount_a)
        require_non_negative("amount_b", amount_b)
        require_non_negative("shares_minted", shares_minted)

        cur, shares = self._ledger
        table = ShareTable(shares)
        table.add(provider, shares_minted)
        self._commit(
            PoolReserves(
                reserve_a=cur.reserve_a + amount_a,
                reserve_b=cur.reserve_b + amount_b,
                total_shares=cur.total_shares + shares_minted,
            ),
            table,
        )

    def apply_withdrawal(self, provider: Owner, amount_a: Amount, amount_b: Amount, shares_burned: Amount) -> None:
        """Debit both reserves and burn `shares_burned` from `provider`."""
        require_identifier("provider", provider)
        require_non_negative("amount_a", amount_a)
        require_non_negative("amount_b", amount_b)
        require_non_negative("shares_burned", shares_burned)

        cur, shares = self._ledger
        table = ShareTable(shares)
        try:
            table.subtract(provider, shares_burned)
        except ValueError as exc:
            raise PoolInvariantError(["inv_non_negative"]) from exc
        self._commit(
            PoolReserves(
                reserve_a=cur.reserve_a - amount_a,
                reserve_b=cur.reserve_b - amount_b,
                total_shares=cur.total_shares - shares_burned,
            ),
            table,
        )

    def apply_swap(self, direction: SwapDirection, amount_in: Amount, amount_out: Amount) -> None:
        """Move `amount_in` into one reserve and `amount_out` out of the other."""
        require_non_negative("amount_in", amount_in)
        require_non_negative("amount_out", amount_out)

        cur, shares = self._ledger
        if direction is SwapDirection.A_TO_B:
            new_a, new_b = cur.reserve_a + amount_in, cur.reserve_b - amount_out
        else:
            new_a, new_b = cur.reserve_a - amount_out, cur.reserve_b + amount_in
        self._commit(
            PoolReserves(reserve_a=new_a, reserve_b=new_b, total_shares=cur.total_shares),
            ShareTable(shares),
        )

    def _commit(self, reserves: PoolReserves, table: ShareTable) -> None:
        balances = table.get_all_balances()
        violations = check_all(reserves, balances)
        if violations:
            raise PoolInvariantError(violations)
        self._ledger = (reserves, MappingProxyType(balances))

    def __repr__(self) -> str:
        r = self._ledger[0]
        return (
            f"PoolState(assets=({self._asset_a}, {self._asset_b}), "
            f"reserves=({r.reserve_a}, {r.reserve_b}), "
            f"total_shares={r.total_shares}, status={self.status.value})"
        )
