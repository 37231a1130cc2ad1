"""
AMM facade: one pool, its two ledgers and its event log behind the public
query/mutator surface.

    amm = AMM.create("LSE", "USD", ledger_lse, ledger_usd)
    amm.add_liquidity(to_units(100_000), to_units(100_000), "deployer")
    out = amm.calculate_token1_swap(to_units(1))
    amm.connect("investor1").swap_token1(to_units(1))

Mutators take the caller identity explicitly; `connect(caller)` returns a
session whose mutators are scoped to that caller.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..config import PoolConfig
from ..errors import EmptyPool
from ..state.pool import PoolReserves, PoolState, PoolStatus
from ..state.types import Amount, AssetId, Owner, require_identifier
from .cpmm import spot_price
from .events import BurnRecord, InMemoryEventLog, MintRecord, SwapRecord
from .interfaces import Clock, EventLog, ExternalLedger
from .liquidity import LiquidityManager
from .swap import SwapEngine


class AMM:
    def __init__(
        self,
        pool: PoolState,
        ledger_a: ExternalLedger,
        ledger_b: ExternalLedger,
        *,
        events: Optional[EventLog] = None,
        config: Optional[PoolConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.pool = pool
        self.config = config if config is not None else PoolConfig()
        self.events = events if events is not None else InMemoryEventLog()
        self.liquidity = LiquidityManager(ledger_a, ledger_b, events=self.events, config=self.config, clock=clock)
        self.swaps = SwapEngine(ledger_a, ledger_b, events=self.events, config=self.config, clock=clock)

    @classmethod
    def create(
        cls,
        asset_a: AssetId,
        asset_b: AssetId,
        ledger_a: ExternalLedger,
        ledger_b: ExternalLedger,
        *,
        account: Optional[str] = None,
        events: Optional[EventLog] = None,
        config: Optional[PoolConfig] = None,
        clock: Optional[Clock] = None,
    ) -> "AMM":
        """Create an empty pool for (asset_a, asset_b)."""
        pool = PoolState(asset_a, asset_b, account=account)
        return cls(pool, ledger_a, ledger_b, events=events, config=config, clock=clock)

    # -- queries ------------------------------------------------------------

    def asset_a(self) -> AssetId:
        return self.pool.asset_a

    def asset_b(self) -> AssetId:
        return self.pool.asset_b

    def account(self) -> str:
        return self.pool.account

    def reserve_a(self) -> Amount:
        return self.pool.reserve_a

    def reserve_b(self) -> Amount:
        return self.pool.reserve_b

    def total_shares(self) -> Amount:
        return self.pool.total_shares

    def share_of(self, owner: Owner) -> Amount:
        return self.pool.share_of(owner)

    def shares(self) -> Dict[Owner, Amount]:
        return self.pool.shares()

    def reserves(self) -> PoolReserves:
        return self.pool.reserves()

    def status(self) -> PoolStatus:
        return self.pool.status

    def calculate_token2_deposit(self, amount_a: Amount) -> Amount:
        return self.liquidity.calculate_token2_deposit(self.pool, amount_a)

    def calculate_token1_deposit(self, amount_b: Amount) -> Amount:
        return self.liquidity.calculate_token1_deposit(self.pool, amount_b)

    def calculate_withdraw_amount(self, share_amount: Amount) -> Tuple[Amount, Amount]:
        return self.liquidity.calculate_withdraw_amount(self.pool, share_amount)

    def calculate_token1_swap(self, amount_in: Amount) -> Amount:
        return self.swaps.calculate_token1_swap(self.pool, amount_in)

    def calculate_token2_swap(self, amount_in: Amount) -> Amount:
        return self.swaps.calculate_token2_swap(self.pool, amount_in)

    def spot_price(self) -> int:
        """Price of one asset-A unit in asset B, scaled by `config.scale`."""
        r = self.pool.reserves()
        if r.total_shares == 0:
            raise EmptyPool("pool has no price while empty")
        return spot_price(r.reserve_a, r.reserve_b, self.config.scale)

    # -- mutators -----------------------------------------------------------

    def add_liquidity(self, amount_a: Amount, amount_b: Amount, caller: Owner) -> MintRecord:
        return self.liquidity.add_liquidity(self.pool, amount_a, amount_b, caller)

    def remove_liquidity(self, share_amount: Amount, caller: Owner) -> BurnRecord:
        return self.liquidity.remove_liquidity(self.pool, share_amount, caller)

    def swap_token1(self, amount_in: Amount, caller: Owner) -> SwapRecord:
        return self.swaps.swap_token1(self.pool, amount_in, caller)

    def swap_token2(self, amount_in: Amount, caller: Owner) -> SwapRecord:
        return self.swaps.swap_token2(self.pool, amount_in, caller)

    def connect(self, caller: Owner) -> "AMMSession":
        return AMMSession(self, caller)

    def __repr__(self) -> str:
        return f"AMM({self.pool!r})"


class AMMSession:
    """Mutators of an `AMM` bound to one caller identity."""

    def __init__(self, amm: AMM, caller: Owner) -> None:
        require_identifier("caller", caller)
        self.amm = amm
        self.caller = caller

    def add_liquidity(self, amount_a: Amount, amount_b: Amount) -> MintRecord:
        return self.amm.add_liquidity(amount_a, amount_b, self.caller)

    def remove_liquidity(self, share_amount: Amount) -> BurnRecord:
        return self.amm.remove_liquidity(share_amount, self.caller)

    def swap_token1(self, amount_in: Amount) -> SwapRecord:
        return self.amm.swap_token1(amount_in, self.caller)

    def swap_token2(self, amount_in: Amount) -> SwapRecord:
        return self.amm.swap_token2(amount_in, self.caller)

    def shares(self) -> Amount:
        """The caller's own share balance."""
        return self.amm.share_of(self.caller)
