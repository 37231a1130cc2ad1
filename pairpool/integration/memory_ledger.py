"""
In-memory token ledger (imperative shell for tests, demos and simulations).

`TokenLedger` models one fungible token with ERC-20 style balances and
approvals. `TokenLedger.view(account)` returns an `ExternalLedger` bound to
`account`, which is what the pool engine consumes.

Every token operation is atomic: balances and allowances are updated, then
transfer hooks run; if a hook raises, the operation is reverted before the
exception propagates. Hooks let tests observe (or re-enter) the pool while a
transfer is in flight.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Set, Tuple

from ..config import PoolConfig
from ..core.amm import AMM
from ..core.interfaces import Clock, EventLog
from ..errors import TransferFailed
from ..state.pool import PoolState
from ..state.types import Amount, AssetId, Owner, require_identifier, require_non_negative

TransferHook = Callable[[Owner, Owner, Amount], None]


class TokenLedger:
    """
    Deterministic single-token ledger.

    Attributes:
        asset: Asset identifier used as the pool's asset id
        name: Human-readable token name
        symbol: Ticker symbol
    """

    def __init__(self, asset: AssetId, *, name: Optional[str] = None, symbol: Optional[str] = None) -> None:
        require_identifier("asset", asset)
        self.asset = asset
        self.name = name or asset
        self.symbol = symbol or asset
        self._balances: Dict[Owner, Amount] = {}
        self._allowances: Dict[Tuple[Owner, Owner], Amount] = {}
        self._frozen: Set[Owner] = set()
        self._hooks: List[TransferHook] = []

    # -- reads ----------------------------------------------------------------

    def balance_of(self, owner: Owner) -> Amount:
        return self._balances.get(owner, 0)

    def total_supply(self) -> Amount:
        return sum(self._balances.values())

    def allowance(self, owner: Owner, spender: Owner) -> Amount:
        return self._allowances.get((owner, spender), 0)

    # -- admin ----------------------------------------------------------------

    def mint(self, to: Owner, amount: Amount) -> None:
        require_non_negative("amount", amount)
        self._credit(to, amount)

    def freeze(self, account: Owner) -> None:
        """Reject every transfer from or to `account` until `unfreeze`."""
        self._frozen.add(account)

    def unfreeze(self, account: Owner) -> None:
        self._frozen.discard(account)

    def on_transfer(self, hook: TransferHook) -> None:
        """Register `hook(sender, to, amount)`, run after each movement."""
        self._hooks.append(hook)

    def clear_hooks(self) -> None:
        self._hooks.clear()

    # -- transfers ------------------------------------------------------------

    def approve(self, owner: Owner, spender: Owner, amount: Amount) -> bool:
        require_non_negative("amount", amount)
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: Owner, to: Owner, amount: Amount) -> bool:
        require_non_negative("amount", amount)
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: Owner, owner: Owner, to: Owner, amount: Amount) -> bool:
        require_non_negative("amount", amount)
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise TransferFailed(
                f"{self.symbol}: allowance of {spender} over {owner} is {allowed}, need {amount}"
            )
        self.approve(owner, spender, allowed - amount)
        try:
            self._move(owner, to, amount)
        except Exception:
            self.approve(owner, spender, allowed)
            raise
        return True

    def _move(self, sender: Owner, to: Owner, amount: Amount) -> None:
        for account in (sender, to):
            if account in self._frozen:
                raise TransferFailed(f"{self.symbol}: account {account} is frozen")
        held = self.balance_of(sender)
        if held < amount:
            raise TransferFailed(f"{self.symbol}: balance of {sender} is {held}, need {amount}")

        self._debit(sender, amount)
        self._credit(to, amount)
        try:
            for hook in list(self._hooks):
                hook(sender, to, amount)
        except Exception:
            self._debit(to, amount)
            self._credit(sender, amount)
            raise

    def _credit(self, owner: Owner, amount: Amount) -> None:
        if amount:
            self._balances[owner] = self._balances.get(owner, 0) + amount

    def _debit(self, owner: Owner, amount: Amount) -> None:
        remaining = self._balances.get(owner, 0) - amount
        if remaining:
            self._balances[owner] = remaining
        else:
            self._balances.pop(owner, None)

    def view(self, account: Owner) -> "BoundLedger":
        return BoundLedger(self, account)

    def __repr__(self) -> str:
        return f"TokenLedger({self.symbol}, supply={self.total_supply()})"


class BoundLedger:
    """`ExternalLedger` view of a `TokenLedger` acting as `account`."""

    def __init__(self, token: TokenLedger, account: Owner) -> None:
        self.token = token
        self.account = account

    def transfer_from(self, owner: Owner, to: Owner, amount: Amount) -> bool:
        return self.token.transfer_from(self.account, owner, to, amount)

    def transfer(self, to: Owner, amount: Amount) -> bool:
        return self.token.transfer(self.account, to, amount)

    def balance_of(self, owner: Owner) -> Amount:
        return self.token.balance_of(owner)


def deploy_pool(
    token_a: TokenLedger,
    token_b: TokenLedger,
    *,
    account: Optional[str] = None,
    events: Optional[EventLog] = None,
    config: Optional[PoolConfig] = None,
    clock: Optional[Clock] = None,
) -> AMM:
    """Create an empty pool over two in-memory tokens, wired to the pool account."""
    pool = PoolState(token_a.asset, token_b.asset, account=account)
    return AMM(
        pool,
        token_a.view(pool.account),
        token_b.view(pool.account),
        events=events,
        config=config,
        clock=clock,
    )
