"""
Share balance tracking for a single pool.

Shares are the pool's ownership units; they are not transferable assets and
live only inside the pool that issued them.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .types import Amount, Owner


class ShareTable:
    """
    Share balance table mapping owner -> share amount.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self, balances: Optional[Mapping[Owner, Amount]] = None) -> None:
        self._balances: Dict[Owner, Amount] = {}
        for owner, amount in (balances or {}).items():
            self.set(owner, amount)

    def get(self, owner: Owner) -> Amount:
        """Get share balance for owner. Returns 0 if not found."""
        return self._balances.get(owner, 0)

    def set(self, owner: Owner, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(owner, None)
        else:
            self._balances[owner] = amount

    def add(self, owner: Owner, delta: int) -> None:
        """Add delta to a share balance (delta may be negative)."""
        current = self.get(owner)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient share balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(owner, new_balance)

    def subtract(self, owner: Owner, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(owner, -delta)

    def get_all_balances(self) -> Dict[Owner, Amount]:
        """Return all share balances."""
        return dict(self._balances)

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} holders)"
