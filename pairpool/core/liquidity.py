"""
Liquidity management operations: add/remove liquidity and deposit quotes.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import InsufficientShares, RatioMismatch, ZeroAmount
from ..state.pool import PoolState
from ..state.types import Amount, Owner, require_identifier, require_non_negative
from .cpmm import compute_share_mint, compute_withdrawal, quote_paired_deposit
from .events import BurnRecord, MintRecord
from .operation import PoolOperator

_log = logging.getLogger(__name__)


class LiquidityManager(PoolOperator):
    """Deposits and withdrawals against a `PoolState`."""

    def calculate_token2_deposit(self, pool: PoolState, amount_a: Amount) -> Amount:
        """
        Amount of asset B required alongside `amount_a` of asset A.

            floor(reserve_b * amount_a / reserve_a)

        Raises:
            EmptyPool: reserve_a is zero
        """
        r = pool.reserves()
        return quote_paired_deposit(r.reserve_a, r.reserve_b, amount_a)

    def calculate_token1_deposit(self, pool: PoolState, amount_b: Amount) -> Amount:
        """Amount of asset A required alongside `amount_b` of asset B."""
        r = pool.reserves()
        return quote_paired_deposit(r.reserve_b, r.reserve_a, amount_b)

    def calculate_withdraw_amount(self, pool: PoolState, share_amount: Amount) -> Tuple[Amount, Amount]:
        """(out_a, out_b) paid for burning `share_amount` against the current state."""
        r = pool.reserves()
        return compute_withdrawal(share_amount, r.reserve_a, r.reserve_b, r.total_shares)

    def add_liquidity(self, pool: PoolState, amount_a: Amount, amount_b: Amount, provider: Owner) -> MintRecord:
        """
        Deposit both assets and mint shares to `provider`.

        Empty pool: any ratio is accepted and `config.initial_shares` are minted.
        Seeded pool: `amount_b` must equal `calculate_token2_deposit(amount_a)`
        exactly; mints floor(total_shares * amount_a / reserve_a).

        Raises:
            ZeroAmount: either amount is zero
            RatioMismatch: amount_b does not match the reserve ratio
            TransferFailed: a ledger pull failed (nothing is kept)
        """
        require_non_negative("amount_a", amount_a)
        require_non_negative("amount_b", amount_b)
        require_identifier("provider", provider)
        if amount_a == 0 or amount_b == 0:
            raise ZeroAmount(f"deposit amounts must be positive: ({amount_a}, {amount_b})")

        with pool.exclusive():
            r = pool.reserves()
            if r.total_shares == 0:
                minted = self.config.initial_shares
            else:
                required_b = quote_paired_deposit(r.reserve_a, r.reserve_b, amount_a)
                if amount_b != required_b:
                    raise RatioMismatch(expected=required_b, actual=amount_b)
                minted = compute_share_mint(r.reserve_a, r.total_shares, amount_a)
                if minted == 0:
                    _log.warning("deposit of %d/%d by %s mints zero shares", amount_a, amount_b, provider)

            record = MintRecord(provider=provider, amount_a=amount_a, amount_b=amount_b, shares_minted=minted)
            with self.effects(pool, "add_liquidity") as batch:
                pool.apply_deposit(provider, amount_a, amount_b, minted)
                batch.pull(self.ledger_a, pool.asset_a, provider, amount_a)
                batch.pull(self.ledger_b, pool.asset_b, provider, amount_b)
                self.events.emit(record)

        _log.debug("add_liquidity provider=%s amounts=(%d, %d) minted=%d", provider, amount_a, amount_b, minted)
        return record

    def remove_liquidity(self, pool: PoolState, share_amount: Amount, provider: Owner) -> BurnRecord:
        """
        Burn `share_amount` of `provider`'s shares and pay out the pro-rata reserves.

        Raises:
            ZeroAmount: share_amount is zero
            InsufficientShares: provider holds fewer than share_amount shares
            TransferFailed: a ledger push failed (nothing is kept)
        """
        require_non_negative("share_amount", share_amount)
        require_identifier("provider", provider)
        if share_amount == 0:
            raise ZeroAmount("share_amount must be positive")

        with pool.exclusive():
            held = pool.share_of(provider)
            if held < share_amount:
                raise InsufficientShares(requested=share_amount, available=held)
            r = pool.reserves()
            out_a, out_b = compute_withdrawal(share_amount, r.reserve_a, r.reserve_b, r.total_shares)

            record = BurnRecord(provider=provider, out_a=out_a, out_b=out_b, shares_burned=share_amount)
            with self.effects(pool, "remove_liquidity") as batch:
                pool.apply_withdrawal(provider, out_a, out_b, share_amount)
                batch.push(self.ledger_a, pool.asset_a, provider, out_a)
                batch.push(self.ledger_b, pool.asset_b, provider, out_b)
                self.events.emit(record)

        _log.debug("remove_liquidity provider=%s burned=%d out=(%d, %d)", provider, share_amount, out_a, out_b)
        return record
