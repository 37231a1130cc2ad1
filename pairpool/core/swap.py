"""
Swap quotes and execution for both trade directions.

A quote and the swap executed against the same pre-state go through the same
`quote_swap` call, so `calculate_token1_swap(x)` is exactly what
`swap_token1(x)` delivers if nothing else touches the pool in between.
"""

from __future__ import annotations

import logging

from ..errors import EmptyPool
from ..state.pool import PoolReserves, PoolState, SwapDirection
from ..state.types import Amount, Owner, require_identifier, require_non_negative
from .cpmm import SwapQuote, quote_swap
from .events import SwapRecord
from .operation import PoolOperator

_log = logging.getLogger(__name__)


class SwapEngine(PoolOperator):
    """Constant-product swaps against a `PoolState`."""

    def quote(self, reserves: PoolReserves, direction: SwapDirection, amount_in: Amount) -> SwapQuote:
        """
        Price `amount_in` against a reserves snapshot.

        Raises:
            EmptyPool: total_shares is zero
            ZeroAmount: amount_in is zero
            InsufficientLiquidity: the output would drain the opposing reserve
        """
        require_non_negative("amount_in", amount_in)
        if reserves.total_shares == 0:
            raise EmptyPool("swaps require a seeded pool")
        reserve_in, reserve_out = reserves.oriented(direction)
        return quote_swap(reserve_in, reserve_out, amount_in, round_up=self.config.rounds_up)

    def calculate_token1_swap(self, pool: PoolState, amount_in: Amount) -> Amount:
        """Asset B received for `amount_in` of asset A."""
        return self.quote(pool.reserves(), SwapDirection.A_TO_B, amount_in).amount_out

    def calculate_token2_swap(self, pool: PoolState, amount_in: Amount) -> Amount:
        """Asset A received for `amount_in` of asset B."""
        return self.quote(pool.reserves(), SwapDirection.B_TO_A, amount_in).amount_out

    def swap_token1(self, pool: PoolState, amount_in: Amount, trader: Owner) -> SwapRecord:
        return self.swap(pool, SwapDirection.A_TO_B, amount_in, trader)

    def swap_token2(self, pool: PoolState, amount_in: Amount, trader: Owner) -> SwapRecord:
        return self.swap(pool, SwapDirection.B_TO_A, amount_in, trader)

    def swap(self, pool: PoolState, direction: SwapDirection, amount_in: Amount, trader: Owner) -> SwapRecord:
        """
        Execute an exact-in swap for `trader`.

        The output is priced against the pre-trade snapshot, the reserves are
        committed, then the input is pulled and the output pushed.
        """
        require_identifier("trader", trader)

        with pool.exclusive():
            snapshot = pool.reserves()
            q = self.quote(snapshot, direction, amount_in)
            asset_given, asset_received = pool.asset_for(direction)
            if direction is SwapDirection.A_TO_B:
                ledger_in, ledger_out = self.ledger_a, self.ledger_b
            else:
                ledger_in, ledger_out = self.ledger_b, self.ledger_a

            with self.effects(pool, f"swap {direction.value}") as batch:
                pool.apply_swap(direction, q.amount_in, q.amount_out)
                batch.pull(ledger_in, asset_given, trader, q.amount_in)
                batch.push(ledger_out, asset_received, trader, q.amount_out)
                given_after, received_after = pool.reserves().oriented(direction)
                record = SwapRecord(
                    trader=trader,
                    asset_given=asset_given,
                    amount_given=q.amount_in,
                    asset_received=asset_received,
                    amount_received=q.amount_out,
                    reserve_of_given_after=given_after,
                    reserve_of_received_after=received_after,
                    timestamp=self.clock(),
                )
                self.events.emit(record)

        _log.debug(
            "swap %s trader=%s in=%d out=%d k=%d->%d",
            direction.value, trader, q.amount_in, q.amount_out, q.k_before, q.k_after,
        )
        return record
